"""Quiz scheduling window.

A quiz accepts work during ``[start_date, start_date + duration minutes]``.
Both the quiz view and the submission path ask this module, so the two can
never disagree about whether a quiz is open.
"""
from datetime import timedelta
from enum import Enum


class WindowState(Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    ENDED = "ended"


def window_end(start_date, duration):
    return start_date + timedelta(minutes=duration)


def window_state(now, start_date, duration):
    end = window_end(start_date, duration)
    if now < start_date:
        return WindowState.NOT_STARTED
    if now > start_date and now > end:
        return WindowState.ENDED
    # both edges are inclusive
    return WindowState.ACTIVE


def quiz_window_state(quiz, now):
    return window_state(now, quiz.start_date, quiz.duration)
