"""CLI for v0."""

import sys
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from v0_cli import __version__
from v0_cli.chat_commands import chat_app
from v0_cli.config import API_KEY
from v0_cli.errors import ValidationError, handle_errors
from v0_cli.output import print_json
from v0_cli.runtime import get_runtime

logger = structlog.get_logger()

app = App(
    name="v0",
    help="Personal CLI for managing v0.dev chats and projects",
    version=__version__,
)

app.command(chat_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level, writing to stderr."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


@app.command
@handle_errors
def login() -> None:
    """Authenticate with a v0 API key.

    The key is checked against the API and only stored if it is valid.
    """
    runtime = get_runtime()
    api_key = runtime.prompt("Enter your V0 API key: ").strip()
    if not api_key:
        raise ValidationError("API key cannot be empty")

    with runtime.client_for_key(api_key) as client:
        user = client.get_user()
    logger.info("API key validated", user_id=user.id)

    runtime.config.set(API_KEY, api_key)
    print("Successfully authenticated!")


@app.command
@handle_errors
def logout() -> None:
    """Remove the stored API key."""
    get_runtime().config.unset(API_KEY)
    print("Logged out successfully")


@app.command
@handle_errors
def whoami(*, json_: bool = False) -> None:
    """Show current user info.

    Args:
        json_: Output as JSON
    """
    with get_runtime().client() as client:
        user = client.get_user()

    if json_:
        print_json(user.raw)
    else:
        print(f"ID: {user.id}")
        print(f"Email: {user.email}")
        print(f"Name: {user.name or 'N/A'}")


@app.command
@handle_errors
def link(project_id: str) -> None:
    """Link the current directory to a v0 project.

    Args:
        project_id: ID of an existing project
    """
    runtime = get_runtime()
    with runtime.client() as client:
        client.get_project(project_id)
    runtime.links.write(project_id)
    print(f"Linked to project: {project_id}")


@app.command
@handle_errors
def unlink() -> None:
    """Remove the project link from the current directory."""
    get_runtime().links.remove()
    print("Project link removed")


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


if __name__ == "__main__":
    app.meta()
