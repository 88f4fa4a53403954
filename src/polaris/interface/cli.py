"""
Polaris CLI - Command-line interface.

Commands:
- polaris init → Create the data directory and databases
- polaris new-project "name" → Create a project
- polaris files PROJECT_ID → Show a project's file tree
- polaris apply PROJECT_ID response.txt → Apply actions from saved model output
- polaris chat PROJECT_ID "message" → Send a message to the assistant
- polaris status → Show configuration
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from polaris.actions.applier import ApplyReport, apply_text
from polaris.core.config import settings, setup_logging
from polaris.core.types import FileNode, MessageRole, MessageStatus
from polaris.storage.conversations import ConversationStore
from polaris.storage.files import FileStore

app = typer.Typer(
    name="polaris",
    help="Polaris - AI coding assistant for project workspaces",
    no_args_is_help=True,
)
console = Console()


def run_async(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _require_project(store: FileStore, project_id: str) -> None:
    if not store.get_project(project_id):
        console.print(f"[red]Project not found: {project_id}[/red]")
        raise typer.Exit(code=1)


def _print_report(report: ApplyReport) -> None:
    if not report.results:
        console.print("[dim]No actions found[/dim]")
        return

    table = Table(title="Actions")
    table.add_column("Action", style="cyan")
    table.add_column("Target", style="white")
    table.add_column("Result")

    for result in report.results:
        outcome = "[green]applied[/green]" if result.ok else f"[red]failed: {result.error}[/red]"
        table.add_row(result.kind, result.target, outcome)

    console.print(table)
    console.print(
        f"[bold]{report.created}[/bold] created, "
        f"[bold]{report.updated}[/bold] updated, "
        f"[bold]{report.failed}[/bold] failed"
    )


def _build_tree(nodes: list[FileNode], label: str) -> Tree:
    children: dict[str | None, list[FileNode]] = {}
    for node in nodes:
        children.setdefault(node.parent_id, []).append(node)

    def add_children(branch: Tree, parent_id: str | None) -> None:
        for node in sorted(children.get(parent_id, []), key=lambda n: (not n.is_folder, n.name.lower())):
            if node.is_folder:
                add_children(branch.add(f"[bold blue]{node.name}/[/bold blue]"), node.id)
            else:
                branch.add(f"{node.name} [dim]{node.id}[/dim]")

    root = Tree(label)
    add_children(root, None)
    return root


@app.command()
def init():
    """Initialize the data directory and databases."""
    setup_logging()

    console.print("[bold]Initializing Polaris...[/bold]\n")

    settings.ensure_directories()
    FileStore()
    ConversationStore()
    console.print(f"  ✓ Data directory: {settings.data_dir}")

    console.print("\n[green]✓ Initialization complete![/green]")


@app.command("new-project")
def new_project(
    name: str = typer.Argument(..., help="Project name"),
):
    """Create a new project."""
    setup_logging()

    store = FileStore()
    project_id = store.create_project(name)
    console.print(f"[green]✓ Created project[/green] {name} [dim]{project_id}[/dim]")


@app.command()
def files(
    project_id: str = typer.Argument(..., help="Project ID"),
):
    """Show a project's file tree."""
    setup_logging()

    store = FileStore()
    _require_project(store, project_id)

    nodes = store.list_project_files(project_id)
    if not nodes:
        console.print("[dim]No files yet[/dim]")
        return

    project = store.get_project(project_id)
    console.print(_build_tree(nodes, f"[bold]{project.name}[/bold]"))


@app.command()
def apply(
    project_id: str = typer.Argument(..., help="Project ID"),
    source: str = typer.Argument(..., help="File with model output, or - for stdin"),
):
    """Apply the file actions found in saved model output."""
    setup_logging()

    store = FileStore()
    _require_project(store, project_id)

    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Could not read {source}: {e.strerror or e}[/red]")
            raise typer.Exit(code=1)

    report = apply_text(store, project_id, text)
    _print_report(report)

    if not report.success:
        raise typer.Exit(code=1)


@app.command()
def chat(
    project_id: str = typer.Argument(..., help="Project ID"),
    message: str = typer.Argument(..., help="Your message"),
    conversation: Optional[str] = typer.Option(None, "--conversation", "-c", help="Continue a conversation"),
):
    """Send a message to the assistant and apply its file actions."""
    setup_logging()

    from polaris.workflow.process_message import run_process_message

    store = FileStore()
    _require_project(store, project_id)
    conversations = ConversationStore()

    conv_id = conversation
    if conv_id is None or not conversations.get_conversation(conv_id):
        conv_id = conversations.create_conversation(project_id)

    conversations.add_message(conv_id, MessageRole.USER, message)
    message_id = conversations.add_message(conv_id, MessageRole.ASSISTANT, "", status=MessageStatus.PROCESSING)

    event = {
        "message_id": message_id,
        "conversation_id": conv_id,
        "project_id": project_id,
        "message": message,
    }

    try:
        with console.status("Thinking..."):
            result = run_async(run_process_message(event, files=store, conversations=conversations))
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    reply = conversations.get_message(message_id)
    title = conversations.get_conversation(conv_id).title
    console.print(Panel(Markdown(reply.content if reply else ""), title=title))

    actions = result["actions"]
    console.print(
        f"[dim]{actions['created']} created, {actions['updated']} updated, "
        f"{actions['failed']} failed · conversation {conv_id}[/dim]"
    )


@app.command()
def status():
    """Show system status."""
    setup_logging()

    console.print("[bold]Polaris Status[/bold]\n")

    console.print(f"Data directory: {settings.data_dir}")
    console.print(f"  Exists: {'✓' if settings.data_dir.exists() else '✗'}")

    if settings.files_db_path.exists():
        projects = FileStore().list_projects()
        console.print(f"\nProjects: {len(projects)}")
        for project in projects:
            console.print(f"  {project.name} [dim]{project.id}[/dim]")

    console.print(f"\nInternal key: {'✓ Set' if settings.internal_key else '✗ Not set'}")

    console.print("\nLLM:")
    console.print(f"  Provider: {settings.default_llm}")
    if settings.default_llm == "ollama":
        console.print(f"  Endpoint: {settings.ollama_base_url}")
        console.print(f"  Model: {settings.ollama_model}")
    else:
        api_key = settings.openai_api_key if settings.default_llm == "openai" else settings.anthropic_api_key
        console.print(f"  API Key: {'✓ Set' if api_key else '✗ Not set'}")


if __name__ == "__main__":
    app()
