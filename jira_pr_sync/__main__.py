"""Allows running the action with `python -m jira_pr_sync`."""

from jira_pr_sync.configuration.cli import typer_app

if __name__ == "__main__":
    typer_app()
