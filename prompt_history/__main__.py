"""
Entrypoint for running the API server with `python -m prompt_history`.
"""

if __name__ == "__main__":
    from prompt_history.main import run

    run()
