"""
工作日計算

本月 1 號到今天（含）之間的週一至週五，並依週分組顯示
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

# Worklog 固定從當地時間 09:00 開始
WORKDAY_START = time(9, 0)


@dataclass(frozen=True)
class WeekGroup:
    """同一週 (週一到週五) 的工作日"""
    index: int               # 本月第幾週，從 1 開始
    days: tuple[date, ...]

    @property
    def start(self) -> date:
        return self.days[0]

    @property
    def end(self) -> date:
        return self.days[-1]

    @property
    def label(self) -> str:
        return (f"Week {self.index}: {format_date_for_display(self.start)}"
                f" - {format_date_for_display(self.end)}")


def is_workday(day: date) -> bool:
    """週一 (0) 到週五 (4)"""
    return day.weekday() < 5


def get_work_days_in_month(today: Optional[date] = None) -> list[date]:
    """
    獲取本月到今天為止的所有工作日

    Args:
        today: 基準日，預設為系統日期

    Returns:
        由小到大排序的日期列表，不含週末與未來日期
    """
    if today is None:
        today = date.today()

    work_days = []
    day = today.replace(day=1)
    while day <= today:
        if is_workday(day):
            work_days.append(day)
        day += timedelta(days=1)
    return work_days


def group_work_days_by_week(work_days: list[date]) -> list[WeekGroup]:
    """遇到週一且目前這週已有日期時，開始新的一週"""
    weeks: list[list[date]] = []
    current_week: list[date] = []

    for day in work_days:
        if day.weekday() == 0 and current_week:
            weeks.append(current_week)
            current_week = []
        current_week.append(day)

    if current_week:
        weeks.append(current_week)

    return [WeekGroup(index=i, days=tuple(days)) for i, days in enumerate(weeks, 1)]


def format_date_for_display(day: date) -> str:
    """短格式，例如 Jul 14 (Mon)"""
    return f"{day:%b} {day.day} ({day:%a})"


def format_date_for_summary(day: date) -> str:
    """完整格式，例如 Monday, July 14, 2025"""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def format_started(day: date) -> str:
    """
    格式化為 GraphQL 的 started 欄位

    當地時間 09:00:00.000，帶本地時區偏移，例如 2025-07-14T09:00:00.000+02:00
    """
    started = datetime.combine(day, WORKDAY_START).astimezone()
    return started.isoformat(timespec="milliseconds")
