"""Interactive CLI application."""
import logging
from datetime import date, datetime, timedelta
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from prep_planner.analytics import (
    get_analytics_data, get_completion_color, get_completion_label, get_overview_stats,
)
from prep_planner.config import DEFAULT_DB_PATH, PLAYBOOKS_DIR
from prep_planner.db import Store
from prep_planner.errors import InvalidScheduleError, WorkbookNotFoundError
from prep_planner.importer import find_default_workbook, run_import
from prep_planner.logging_config import setup_logging
from prep_planner.mocks import get_mocks, record_mock_outcome, schedule_mock
from prep_planner.models import MOCK_OUTCOMES, PLAN_STATUSES, PROBLEM_STATUSES, SESSION_KINDS
from prep_planner.plan import (
    get_plan_items_by_date_range, get_todays_plan_items, update_plan_item_status,
)
from prep_planner.playbooks import list_playbooks
from prep_planner.problems import (
    add_time_to_oop_problem, add_time_to_problem, get_oop_problems, get_problems,
    update_oop_problem_status, update_problem_status,
)
from prep_planner.resources import get_resources, toggle_resource_pin
from prep_planner.search import search_all
from prep_planner.sessions import reset_all_data, save_session

logger = logging.getLogger(__name__)
console = Console()

STATUS_STYLES = {
    "todo": "dim", "in_progress": "yellow", "done": "green",
    "solved": "green", "skipped": "dim",
}
DIFFICULTY_STYLES = {"Easy": "green", "Medium": "yellow", "Hard": "red"}
OUTCOME_STYLES = {"pass": "green", "borderline": "yellow", "fail": "red"}


def styled(value, styles: dict) -> str:
    if value is None:
        return ""
    style = styles.get(value, "white")
    return f"[{style}]{value}[/{style}]"


def show_welcome():
    console.print(Panel(
        "[bold]Interview Prep Planner[/bold]\n[dim]Plan, track and review your curriculum[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("today", "Today's plan items"),
        ("calendar", "Week at a glance"),
        ("problems", "Weekly problem sets"),
        ("oop", "OOP problem sets"),
        ("mocks", "Mock interviews"),
        ("resources", "Projects & resources"),
        ("search", "Search everything"),
        ("log", "Log a study session"),
        ("dashboard", "Progress analytics"),
        ("playbooks", "List playbooks"),
        ("import", "Import the plan workbook"),
        ("reset", "Delete all data"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def plan_table(items: list, title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Date")
    table.add_column("Type", style="cyan")
    table.add_column("Task")
    table.add_column("Status")
    for item in items:
        table.add_row(
            str(item["id"]), f"{item['date']} {item['day_name'][:3]}", item["task_type"],
            item["task_desc"], styled(item["status"], STATUS_STYLES),
        )
    return table


def cmd_today(store: Store):
    items = get_todays_plan_items(store)
    if not items:
        console.print("[yellow]Nothing planned for today. Import a plan or check the calendar.[/yellow]")
        return
    console.print(Panel(
        f"[bold]{items[0]['theme']}[/bold]\nWeek {items[0]['week']}",
        title=f"Today - {date.today().isoformat()}",
    ))
    console.print(plan_table(items, "Today's Tasks"))
    if items[0].get("weekly_challenge"):
        console.print(f"\n[magenta]Weekly challenge:[/magenta] {items[0]['weekly_challenge']}")
    item_id = Prompt.ask("Update status of item ID (Enter to skip)", default="")
    if item_id.strip():
        status = Prompt.ask("New status", choices=list(PLAN_STATUSES))
        update_plan_item_status(store, int(item_id), status)
        console.print("[green]Status updated.[/green]")


def cmd_calendar(store: Store):
    start = date.today() - timedelta(days=date.today().weekday())
    end = start + timedelta(days=6)
    items = get_plan_items_by_date_range(store, start.isoformat(), end.isoformat())
    if not items:
        console.print("[yellow]No plan items this week.[/yellow]")
        return
    console.print(plan_table(items, f"Week of {start.isoformat()}"))


def _problem_session(store: Store, rows: list, group_field: str, title: str,
                     set_status, add_time):
    if not rows:
        console.print("[yellow]No problems match.[/yellow]")
        return
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Week", justify="right")
    table.add_column(group_field.title(), style="cyan")
    table.add_column("Problem")
    table.add_column("Difficulty")
    table.add_column("Status")
    table.add_column("Mins", justify="right")
    for p in rows:
        table.add_row(
            str(p["id"]), str(p["week"]), p[group_field], p["name"],
            styled(p["difficulty"], DIFFICULTY_STYLES), styled(p["status"], STATUS_STYLES),
            str(p["time_spent_mins"]),
        )
    console.print(table)
    problem_id = Prompt.ask("Problem ID to update (Enter to skip)", default="")
    if not problem_id.strip():
        return
    status = Prompt.ask("New status", choices=list(PROBLEM_STATUSES), default="solved")
    set_status(store, int(problem_id), status)
    minutes = IntPrompt.ask("Minutes spent", default=0)
    if minutes > 0:
        add_time(store, int(problem_id), minutes)
    console.print("[green]Problem updated.[/green]")


def _week_filter() -> int | None:
    week = Prompt.ask("Week (Enter for all)", default="")
    return int(week) if week.strip().isdigit() else None


def cmd_problems(store: Store):
    rows = get_problems(store, week=_week_filter())
    _problem_session(store, rows, "category", "Weekly Problem Sets",
                     update_problem_status, add_time_to_problem)


def cmd_oop(store: Store):
    rows = get_oop_problems(store, week=_week_filter())
    _problem_session(store, rows, "track", "OOP Problem Sets",
                     update_oop_problem_status, add_time_to_oop_problem)


def _format_schedule(ts: int | None) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M") if ts else "unscheduled"


def cmd_mocks(store: Store):
    mocks = get_mocks(store)
    if not mocks:
        console.print("[yellow]No mocks yet. Import the plan workbook first.[/yellow]")
        return
    table = Table(title="Mock Interviews")
    table.add_column("ID", justify="right")
    table.add_column("Week", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Goal")
    table.add_column("Scheduled")
    table.add_column("Outcome")
    for m in mocks:
        table.add_row(
            str(m["id"]), str(m["week"]), m["mock_type"], m["goal"],
            _format_schedule(m["scheduled_at"]), styled(m["outcome"], OUTCOME_STYLES),
        )
    console.print(table)
    mock_id = Prompt.ask("Mock ID (Enter to skip)", default="")
    if not mock_id.strip():
        return
    mock = next((m for m in mocks if str(m["id"]) == mock_id.strip()), None)
    if mock is None:
        console.print("[red]No such mock.[/red]")
        return
    if mock["scheduled_at"] is None:
        when = Prompt.ask("When (e.g. 2025-06-12 14:00)")
        interviewer = Prompt.ask("Interviewer", default="")
        duration = IntPrompt.ask("Duration (minutes)", default=60)
        try:
            schedule_mock(store, mock["id"], when, interviewer=interviewer, duration=duration)
        except InvalidScheduleError as e:
            console.print(f"[red]{e}[/red]")
            return
        console.print("[green]Mock scheduled.[/green]")
    else:
        outcome = Prompt.ask("Outcome", choices=list(MOCK_OUTCOMES))
        score = IntPrompt.ask("Score (1-5)", choices=["1", "2", "3", "4", "5"])
        feedback = Prompt.ask("Feedback", default="")
        record_mock_outcome(store, mock["id"], outcome, feedback=feedback, score=score)
        console.print("[green]Outcome recorded.[/green]")


def cmd_resources(store: Store):
    rows = get_resources(store, week=_week_filter())
    if not rows:
        console.print("[yellow]No resources match.[/yellow]")
        return
    table = Table(title="Projects & Resources")
    table.add_column("ID", justify="right")
    table.add_column("")
    table.add_column("Week", justify="right")
    table.add_column("Area", style="cyan")
    table.add_column("Resource")
    table.add_column("URL", style="dim")
    for r in rows:
        table.add_row(
            str(r["id"]), "*" if r["pinned"] else "", str(r["week"]), r["area"],
            r["title"], r["url"] or "",
        )
    console.print(table)
    resource_id = Prompt.ask("Toggle pin for ID (Enter to skip)", default="")
    if resource_id.strip():
        pinned = toggle_resource_pin(store, int(resource_id))
        console.print("[green]Pinned.[/green]" if pinned else "[dim]Unpinned.[/dim]")


def cmd_search(store: Store):
    query = Prompt.ask("Search for")
    kind = Prompt.ask(
        "Type", choices=["all", "plan", "problem", "oop_problem", "resource", "mock"], default="all",
    )
    results = search_all(store, query, {"type": None if kind == "all" else kind})
    if not results:
        console.print("[yellow]No results. Try fewer or different words.[/yellow]")
        return
    table = Table(title=f"{len(results)} results for '{query}'")
    table.add_column("Score", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Title")
    table.add_column("Details", style="dim")
    table.add_column("Matched")
    for r in results:
        table.add_row(
            f"{r.relevance_score:.0f}", r.type, r.title, r.description, ", ".join(r.matched_fields),
        )
    console.print(table)


def cmd_log(store: Store):
    kind = Prompt.ask("Kind", choices=list(SESSION_KINDS), default="study")
    minutes = IntPrompt.ask("Minutes")
    notes = Prompt.ask("Notes", default="")
    link = Prompt.ask("Link to", choices=["none", "plan", "problem", "oop"], default="none")
    links = {}
    if link != "none":
        target = IntPrompt.ask("ID")
        links = {
            "plan": {"linked_plan_item_id": target},
            "problem": {"linked_problem_id": target},
            "oop": {"linked_oop_problem_id": target},
        }[link]
    save_session(store, date.today(), kind, minutes, notes=notes, **links)
    console.print(f"[green]Logged {minutes} minutes of {kind}.[/green]")


def cmd_dashboard(store: Store):
    stats = get_overview_stats(store)
    pct = stats["plan_completion"]
    color = get_completion_color(pct)
    label = get_completion_label(pct)
    console.print(Panel(
        f"[bold]{stats['plan_done']} of {stats['plan_total']} plan items done[/bold]"
        + (f"\n[dim]Last import: {stats['last_import']}[/dim]" if stats["last_import"] else ""),
        title="Progress Dashboard", border_style="blue",
    ))

    bar_filled = int(pct / 5)
    bar = f"[{color}]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/{color}]"
    console.print(f"\n  Plan completion: [bold]{pct}%[/bold] {bar} [{color}]{label}[/{color}]\n")

    data = get_analytics_data(store)
    table = Table(title="Weekly Progress")
    table.add_column("Week", justify="right")
    table.add_column("Done", justify="right")
    table.add_column("In progress", justify="right")
    table.add_column("Total", justify="right")
    for w in data["weekly_progress"]:
        table.add_row(str(w["week"]), str(w["completed"]), str(w["in_progress"]), str(w["total"]))
    console.print(table)

    console.print(f"\n  Problems: [bold]{stats['problems_solved']}/{stats['problems_total']}[/bold]  |  "
                  f"OOP: [bold]{stats['oop_solved']}/{stats['oop_total']}[/bold]  |  "
                  f"Mocks: [bold]{stats['mocks_completed']}/{stats['mocks_total']}[/bold]  |  "
                  f"Logged: [bold]{stats['session_minutes']} min[/bold]")


def cmd_playbooks(store: Store):
    playbooks = list_playbooks(PLAYBOOKS_DIR)
    if not playbooks:
        console.print(f"[yellow]No playbooks found in {PLAYBOOKS_DIR}[/yellow]")
        return
    table = Table(title="Playbooks")
    table.add_column("Week", justify="right")
    table.add_column("Title")
    table.add_column("Category", style="cyan")
    table.add_column("Hours", justify="right")
    for pb in playbooks:
        table.add_row(str(pb.week or ""), pb.title, pb.category, str(pb.estimated_hours))
    console.print(table)


def show_import_result(result: dict):
    if not result["success"]:
        console.print(f"[red]Import failed: {result['error']}[/red]")
        return
    table = Table(title="Import Summary")
    table.add_column("Sheet", style="cyan")
    table.add_column("Inserted", justify="right")
    table.add_column("Updated", justify="right")
    table.add_column("Errors", justify="right")
    for sheet, counts in result["data"].items():
        errors = len(counts["errors"])
        table.add_row(
            sheet, str(counts["inserted"]), str(counts["updated"]),
            f"[red]{errors}[/red]" if errors else "0",
        )
    console.print(table)
    for sheet, counts in result["data"].items():
        for err in counts["errors"]:
            console.print(f"  [red]{sheet}[/red] {err}")


def cmd_import(store: Store):
    file_path = Prompt.ask("Workbook path (Enter to search default locations)", default="")
    if not file_path.strip():
        try:
            file_path = str(find_default_workbook())
        except WorkbookNotFoundError as e:
            console.print(f"[red]{e}[/red]")
            return
    show_import_result(run_import(store, Path(file_path).expanduser()))


def cmd_reset(store: Store):
    if not Confirm.ask("[red]Delete ALL plan, problem, mock and session data?[/red]", default=False):
        return
    cleared = reset_all_data(store)
    console.print(f"[green]Cleared {sum(cleared.values())} rows. Playbooks were not touched.[/green]")


COMMANDS = {
    "today": cmd_today,
    "calendar": cmd_calendar,
    "problems": cmd_problems,
    "oop": cmd_oop,
    "mocks": cmd_mocks,
    "resources": cmd_resources,
    "search": cmd_search,
    "log": cmd_log,
    "dashboard": cmd_dashboard,
    "playbooks": cmd_playbooks,
    "import": cmd_import,
    "reset": cmd_reset,
}


def main():
    setup_logging()
    store = Store(DEFAULT_DB_PATH)
    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="today").strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]Good luck with your interviews![/dim]")
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            command(store)
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.debug("Command %s failed", choice, exc_info=True)
            console.print(f"[red]Error: {e}[/red]")
    store.close()


if __name__ == "__main__":
    main()
