"""
A simple CLI for running the server.
"""

import sys

import uvicorn


def main():
    try:
        run = sys.argv[1] == "run"
        setup = sys.argv[1] == "setup"
    except IndexError:
        print("Only supported commands are studygroups run and studygroups setup")
        exit(1)

    if setup:
        from studygroups.config.settings import Settings

        settings = Settings()
        settings.create_schema()

        print(f"Created tables in {settings.database_type} database")
        exit(0)

    if run:
        from studygroups.config.settings import Settings

        settings = Settings()
        uvicorn.run("studygroups.api.app:app", host=settings.hostname, port=settings.port)
        return

    print(f"Unknown command {sys.argv[1]}")
    exit(1)
