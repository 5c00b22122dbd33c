"""Defines the Command Line Interface (CLI) using Typer.

GitHub Actions passes each action input to the step as an `INPUT_<NAME>`
environment variable, with the input name upper-cased and hyphens kept, so
every option below reads its input from that variable.
"""

import asyncio

import structlog
import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from jira_pr_sync.actions import commands
from jira_pr_sync.actions.context import load_pull_request_context
from jira_pr_sync.actions.exceptions import PullRequestContextError
from jira_pr_sync.configuration.env import Settings
from jira_pr_sync.configuration.exceptions import ConfigError
from jira_pr_sync.configuration.log import configure_logging
from jira_pr_sync.configuration.reconcile import reconcile_sync_configuration
from jira_pr_sync.github.exceptions import PlatformRequestError
from jira_pr_sync.jira.exceptions import JiraRequestError
from jira_pr_sync.synchronize.driver import build_outputs, run_jira_sync_workflow
from jira_pr_sync.synchronize.exceptions import ExtractionError, MissingFieldError, OperationsFailedError, RunTimeoutError
from jira_pr_sync.utils.constants import DEFAULT_RUN_TIMEOUT_SECONDS

load_dotenv()

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

typer_app = typer.Typer(pretty_exceptions_show_locals=False, add_completion=False)

EXPECTED_ERRORS = (
    ConfigError,
    PullRequestContextError,
    ExtractionError,
    MissingFieldError,
    JiraRequestError,
    PlatformRequestError,
    OperationsFailedError,
    RunTimeoutError,
)


@typer_app.command(name="sync")
def sync_cli(
    github_token: Annotated[str | None, Option(envvar="INPUT_GITHUB-TOKEN", help="GitHub token used to update the pull request.")] = None,
    jira_username: Annotated[str | None, Option(envvar="INPUT_JIRA-USERNAME", help="Jira username (usually an email address).")] = None,
    jira_api_token: Annotated[str | None, Option(envvar="INPUT_JIRA-API-TOKEN", help="Jira API token.")] = None,
    jira_base_url: Annotated[str | None, Option(envvar="INPUT_JIRA-BASE-URL", help="Base URL of the Jira instance.")] = None,
    issue_key_location: Annotated[
        str | None,
        Option(envvar="INPUT_ISSUE-KEY-LOCATION", help="Where to look for the Jira issue key: branch, title or both."),
    ] = None,
    inject_jira_info_table: Annotated[
        bool, Option(envvar="INPUT_INJECT-JIRA-INFO-TABLE", help="Add a Jira information table to the pull request description.")
    ] = True,
    sync_issue_type: Annotated[bool, Option(envvar="INPUT_SYNC-ISSUE-TYPE", help="Sync the issue type as an 'Issue Type' label.")] = True,
    sync_issue_priority: Annotated[bool, Option(envvar="INPUT_SYNC-ISSUE-PRIORITY", help="Sync the priority as a 'Priority' label.")] = True,
    sync_issue_labels: Annotated[bool, Option(envvar="INPUT_SYNC-ISSUE-LABELS", help="Sync Jira labels as 'Jira Label' labels.")] = True,
    sync_issue_fix_versions: Annotated[
        bool, Option(envvar="INPUT_SYNC-ISSUE-FIX-VERSIONS", help="Sync fix versions as 'Release' labels.")
    ] = True,
    run_timeout: Annotated[
        float, Option(envvar="INPUT_RUN-TIMEOUT", help="Maximum number of seconds the whole run may take.")
    ] = DEFAULT_RUN_TIMEOUT_SECONDS,
    repo: Annotated[str | None, Option(envvar="GITHUB_REPOSITORY", help="Repository name (owner/repo).")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Sync Jira issue metadata onto the pull request that triggered the workflow."""
    settings = Settings()
    configure_logging(debug=debug or settings.RUNNER_DEBUG)

    try:
        config = asyncio.run(
            reconcile_sync_configuration(
                cli_github_token=github_token,
                cli_github_api_url=settings.GITHUB_API_URL,
                cli_repo=repo or settings.GITHUB_REPOSITORY,
                cli_jira_username=jira_username,
                cli_jira_api_token=jira_api_token,
                cli_jira_base_url=jira_base_url,
                cli_issue_key_location=issue_key_location,
                cli_inject_jira_info_table=inject_jira_info_table,
                cli_sync_issue_type=sync_issue_type,
                cli_sync_issue_priority=sync_issue_priority,
                cli_sync_issue_labels=sync_issue_labels,
                cli_sync_issue_fix_versions=sync_issue_fix_versions,
                cli_run_timeout=run_timeout,
            )
        )
        pull_request = load_pull_request_context(settings.GITHUB_EVENT_PATH, settings.GITHUB_HEAD_REF)
        result = asyncio.run(run_jira_sync_workflow(config, pull_request))
    except EXPECTED_ERRORS as exc:
        commands.set_failed(str(exc))
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        logger.exception("Unexpected error while syncing pull request")
        commands.set_failed(f"Unexpected error: {exc}")
        raise typer.Exit(code=1) from exc

    commands.set_outputs(build_outputs(result.issue_key, result.snapshot), settings.GITHUB_OUTPUT)
    for operation_result in result.operation_results:
        label_sync_result = operation_result.label_sync_result
        if label_sync_result is not None:
            typer.echo(
                f"{operation_result.operation}: added {label_sync_result.additions or 'nothing'}, removed {label_sync_result.removals or 'nothing'}",
                err=True,
            )
        else:
            typer.echo(f"{operation_result.operation}: synced", err=True)
