"""
Навигация между экранами клиента
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional

from .models import BirthRecord, FortuneReport, ShareData


class Screen(str, Enum):
    MAIN = "main"
    FORM = "form"
    RESULT = "result"
    SHARE = "share"
    RECORDS = "records"
    SETTINGS = "settings"
    DETAILED = "detailed"
    RECORD_DETAILED = "record-detailed"


# Куда ведет кнопка «назад»
BACK_TARGETS: Dict[Screen, Screen] = {
    Screen.FORM: Screen.MAIN,
    Screen.RESULT: Screen.FORM,
    Screen.DETAILED: Screen.RESULT,
    Screen.RECORD_DETAILED: Screen.RECORDS,
    Screen.SHARE: Screen.MAIN,
    Screen.RECORDS: Screen.MAIN,
    Screen.SETTINGS: Screen.MAIN,
    Screen.MAIN: Screen.MAIN,
}


@dataclass(frozen=True)
class NavigationState:
    """Текущий экран и данные, которые ему нужны"""
    screen: Screen = Screen.MAIN
    record: Optional[BirthRecord] = None
    report: Optional[FortuneReport] = None
    share: Optional[ShareData] = None
    selected: Optional[Dict[str, Any]] = None


def start_fortune(state: NavigationState) -> NavigationState:
    return replace(state, screen=Screen.FORM)


def view_records(state: NavigationState) -> NavigationState:
    return replace(state, screen=Screen.RECORDS)


def view_settings(state: NavigationState) -> NavigationState:
    return replace(state, screen=Screen.SETTINGS)


def show_result(state: NavigationState, record: BirthRecord, report: FortuneReport) -> NavigationState:
    return replace(state, screen=Screen.RESULT, record=record, report=report)


def view_detailed(state: NavigationState) -> NavigationState:
    # без результата подробному экрану нечего показывать
    if state.record is None or state.report is None:
        return state
    return replace(state, screen=Screen.DETAILED)


def view_record_detailed(state: NavigationState, saved_row: Dict[str, Any]) -> NavigationState:
    return replace(state, screen=Screen.RECORD_DETAILED, selected=saved_row)


def open_share(state: NavigationState, share: Optional[ShareData]) -> NavigationState:
    if share is None:
        return replace(state, screen=Screen.MAIN)
    return replace(state, screen=Screen.SHARE, share=share)


def new_reading(state: NavigationState) -> NavigationState:
    return NavigationState()


def go_back(state: NavigationState) -> NavigationState:
    target = BACK_TARGETS[state.screen]
    if state.screen == Screen.RECORD_DETAILED:
        return replace(state, screen=target, selected=None)
    if state.screen == Screen.SHARE:
        return replace(state, screen=target, share=None)
    return replace(state, screen=target)
