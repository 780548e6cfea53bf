#!/usr/bin/env python3
"""
Tyr Worklog CLI

使用 Typer + Rich 為本月的工作日批次建立 worklog
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from .config import Config
from .errors import ConfigurationError, ValidationError
from .graphql_api import WorklogClient, build_operation
from .submitter import Submission, WorklogPayload, submit_batch
from .workdays import (
    WeekGroup, format_date_for_display, format_date_for_summary, format_started,
    get_work_days_in_month, group_work_days_by_week,
)

app = typer.Typer(
    name="tyr-worklog",
    help="為本月工作日批次建立 worklog",
    no_args_is_help=False,
)
console = Console()

STARTED_PLACEHOLDER = "[DATE_WILL_BE_REPLACED]"


def setup_logging(verbose: bool):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def load_config(env_file: Optional[Path] = None) -> Config:
    """載入並檢查配置，缺少必要項目時結束程式"""
    config = Config.load(env_file)
    try:
        config.validate()
    except ConfigurationError as e:
        for name in e.missing:
            console.print(f"[red]❌ Error: {name} is not set in .env file[/red]")
        raise typer.Exit(1)
    return config


def parse_exclusions(text: str, count: int) -> set[int]:
    """
    解析要排除的日期編號

    例如 "3,5-7" -> {3, 5, 6, 7}，編號從 1 開始

    Raises:
        ValidationError: 格式錯誤或超出範圍
    """
    excluded: set[int] = set()
    for part in text.replace(" ", "").split(","):
        if not part:
            continue
        try:
            if "-" in part:
                low, high = (int(x) for x in part.split("-", 1))
            else:
                low = high = int(part)
        except ValueError:
            raise ValidationError(f"Invalid day number: {part}")
        if low > high:
            low, high = high, low
        if low < 1 or high > count:
            raise ValidationError(f"Day number out of range (1-{count}): {part}")
        excluded.update(range(low, high + 1))
    return excluded


def display_work_days(weeks: list[WeekGroup]):
    """依週顯示工作日，每一天帶全月編號"""
    position = 0
    for week in weeks:
        console.print(f"[bold]── {week.label} ──[/bold]")
        for day in week.days:
            position += 1
            console.print(f"  [cyan]{position:>2}.[/cyan] [green]✓[/green] {format_date_for_display(day)}")
        console.print()


def select_days(work_days: list[date], exclude: Optional[str] = None) -> list[date]:
    """
    選擇要建立 worklog 的日期

    預設全選，排除的日期以編號輸入；回傳的順序與 work_days 相同
    """
    display_work_days(group_work_days_by_week(work_days))

    if exclude is not None:
        try:
            excluded = parse_exclusions(exclude, len(work_days))
        except ValidationError as e:
            console.print(f"[red]❌ {e}[/red]")
            raise typer.Exit(1)
    else:
        while True:
            answer = Prompt.ask(
                "Days to exclude [dim](e.g. 3,5-7, Enter to keep all)[/dim]",
                default="",
                show_default=False,
            )
            try:
                excluded = parse_exclusions(answer, len(work_days))
                break
            except ValidationError as e:
                console.print(f"[red]{e}[/red]")

    return [day for i, day in enumerate(work_days, 1) if i not in excluded]


def ask_comment(comment: Optional[str]) -> str:
    """comment 為必填"""
    if comment is not None:
        if not comment.strip():
            raise ValidationError("Comment is required")
        return comment

    while True:
        answer = Prompt.ask("Comment [dim](required)[/dim]", default="", show_default=False)
        if answer.strip():
            return answer
        console.print("[red]Comment is required[/red]")


def collect_payload(config: Config, comment: Optional[str], time_spent: Optional[str],
                    project: Optional[str], ticket: Optional[str]) -> WorklogPayload:
    """依序收集 comment、時數、project、ticket"""
    comment = ask_comment(comment)
    if time_spent is None:
        time_spent = Prompt.ask("Time spent", default=config.time_spent)
    if project is None:
        project = Prompt.ask("Project ID", default=config.project_id)
    if ticket is None:
        ticket = Prompt.ask("Ticket ID", default=config.ticket_id)

    payload = WorklogPayload(comment=comment, time_spent=time_spent, project=project, ticket=ticket)
    payload.validate()
    return payload


def display_summary(payload: WorklogPayload, days: list[date]):
    """顯示即將建立的 worklog 與 GraphQL operation"""
    console.print("\n[bold]📋 Operation summary[/bold]")
    console.print(f"Comment: {escape(payload.comment)}")
    console.print(f"Time:    {escape(payload.time_spent)}")
    console.print(f"Project: {escape(payload.project)}")
    console.print(f"Ticket:  {escape(payload.ticket)}")

    table = Table(title="Days for which worklogs will be created")
    table.add_column("#", style="dim")
    table.add_column("Date", style="green")
    table.add_column("Started", style="cyan")
    for i, day in enumerate(days, 1):
        table.add_row(str(i), format_date_for_summary(day), format_started(day))
    console.print(table)

    preview = build_operation(payload.to_input(days[0]).to_variables())
    preview["variables"]["input"]["started"] = STARTED_PLACEHOLDER
    console.print("\n[bold]🔍 GraphQL operation[/bold]")
    console.print_json(json.dumps(preview))


def print_started(submission: Submission):
    console.print(f"⏳ Creating worklog for {format_date_for_summary(submission.day)}...")


def print_result(submission: Submission):
    day = format_date_for_summary(submission.day)
    if submission.worklog_id is not None:
        console.print(f"  [green]✓[/green] Worklog created for {day} (ID: {submission.worklog_id})")
    else:
        console.print(f"  [red]✗[/red] Error for {day} - {escape(submission.error)}")


@app.command()
def create(
    comment: Optional[str] = typer.Option(None, "--comment", "-c", help="Worklog comment (必填)"),
    time_spent: Optional[str] = typer.Option(None, "--time", "-t", help="每日工時，例如 8h"),
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Project ID"),
    ticket: Optional[str] = typer.Option(None, "--ticket", "-k", help="Ticket ID"),
    exclude: Optional[str] = typer.Option(None, "--exclude", "-x", help="排除的日期編號，例如 3,5-7"),
    yes: bool = typer.Option(False, "--yes", "-y", help="略過最後確認"),
    dry_run: bool = typer.Option(False, "--dry-run", help="只顯示預覽，不送出"),
    env_file: Optional[Path] = typer.Option(None, "--env-file", help=".env 檔案路徑"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="顯示除錯 log"),
):
    """
    為本月的工作日建立 worklog

    預設全選本月到今天為止的工作日，可排除部分日期
    """
    setup_logging(verbose)
    console.print(Panel.fit("[bold]Tyr Worklog Creator[/bold]", title="🕒"))

    config = load_config(env_file)

    work_days = get_work_days_in_month()
    if not work_days:
        console.print("[yellow]No work days in the current month yet[/yellow]")
        return

    final_days = select_days(work_days, exclude)
    if not final_days:
        console.print("[yellow]❌ No days selected. Exiting...[/yellow]")
        return

    try:
        payload = collect_payload(config, comment, time_spent, project, ticket)
    except ValidationError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    display_summary(payload, final_days)

    if dry_run:
        console.print("\n[dim]Dry run, no worklogs created[/dim]")
        return

    if not yes and not Confirm.ask("\nProceed with creating worklogs?", default=False):
        console.print("[yellow]❌ Operation cancelled by user[/yellow]")
        return

    console.print("\n🚀 Creating worklogs...\n")
    client = WorklogClient(config.graphql_url, config.jwt, timeout=config.request_timeout)
    report = submit_batch(client, final_days, payload, on_start=print_started, on_result=print_result)

    if report.all_succeeded:
        console.print(f"\n[green]🎉 Done! {report.success_count} worklogs created[/green]")
    else:
        console.print(f"\n[yellow]Done! Succeeded: {report.success_count}, "
                      f"Failed: {report.failure_count}[/yellow]")
        for submission in report.failed:
            console.print(f"  [red]✗[/red] {format_date_for_summary(submission.day)}")
        raise typer.Exit(1)


@app.command()
def days():
    """列出本月到今天為止的工作日"""
    work_days = get_work_days_in_month()
    if not work_days:
        console.print("[yellow]No work days in the current month yet[/yellow]")
        return

    table = Table(title="📅 Work days")
    table.add_column("Week", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Started", style="green")

    for week in group_work_days_by_week(work_days):
        for day in week.days:
            table.add_row(str(week.index), format_date_for_display(day), format_started(day))
        table.add_section()

    console.print(table)
    console.print(f"\n[bold]{len(work_days)} work days[/bold]")


@app.command()
def status(
    env_file: Optional[Path] = typer.Option(None, "--env-file", help=".env 檔案路徑"),
):
    """顯示配置狀態"""
    config = Config.load(env_file)

    def show(value: str) -> str:
        return value if value else "[red]✗ not set[/red]"

    console.print(f"  Endpoint: {show(escape(config.graphql_url))}")
    console.print(f"  JWT:      {show(config.masked_token())}")
    console.print(f"  Project:  {escape(config.project_id) or '[dim]-[/dim]'}")
    console.print(f"  Ticket:   {escape(config.ticket_id) or '[dim]-[/dim]'}")
    console.print(f"  Time:     {escape(config.time_spent)}")
    console.print(f"  Timeout:  {config.request_timeout:g}s")

    if not config.is_configured():
        console.print(f"\n[red]Missing: {', '.join(config.missing_fields())}[/red]")
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """
    Tyr Worklog - 為本月工作日批次建立 worklog

    使用方式:
      tyr-worklog                       # 互動模式
      tyr-worklog create -c "Dev" -y    # 指定 comment 並略過確認
      tyr-worklog days                  # 列出本月工作日
      tyr-worklog status                # 顯示配置
    """
    if ctx.invoked_subcommand is None:
        create(comment=None, time_spent=None, project=None, ticket=None, exclude=None,
               yes=False, dry_run=False, env_file=None, verbose=False)


if __name__ == "__main__":
    app()
