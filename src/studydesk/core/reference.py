"""Compiled-in reference data: profile, subjects and the weekly class schedule."""

from dataclasses import dataclass

from .schedule import ClassSession


@dataclass(frozen=True)
class UserProfile:
    """Who the assistant works for."""

    name: str
    age: int
    university: str
    program: str
    role: str


USER_PROFILE = UserProfile(
    name="Camilo Henriquez",
    age=19,
    university="Universidad Javeriana",
    program="Industrial Engineering",
    role="Statistics Mentor",
)

SUBJECTS = [
    "Simulation",
    "Operations Fundamentals",
    "Entrepreneurial Skills",
    "Quality Management and Control",
    "Statistical Models",
]

# 0=Sun, 1=Mon, 2=Tue, 3=Wed, 4=Thu, 5=Fri, 6=Sat
WEEKLY_SCHEDULE = [
    # Monday
    ClassSession("fund-mon", "Operations Fundamentals", 1, "18:00", "20:00"),
    ClassSession("mod-mon", "Statistical Models", 1, "11:00", "13:00"),
    # Tuesday
    ClassSession("fund-tue", "Operations Fundamentals", 2, "07:00", "09:00"),
    ClassSession("mod-tue", "Statistical Models", 2, "14:00", "16:00"),
    # Wednesday
    ClassSession("sim-wed", "Simulation", 3, "11:00", "13:00"),
    # Thursday
    ClassSession("fund-thu", "Operations Fundamentals", 4, "07:00", "09:00"),
    ClassSession("cal-thu", "Quality Management and Control", 4, "09:00", "12:00"),
    ClassSession("mod-thu", "Statistical Models", 4, "14:00", "16:00"),
    # Friday
    ClassSession("hab-fri", "Entrepreneurial Skills", 5, "07:00", "09:00"),
    ClassSession("sim-fri", "Simulation", 5, "11:00", "13:00"),
]

# Weekly office hours for the statistics mentoring role
MENTORING_SLOT = ClassSession("mentoring", "Statistics Mentoring", 4, "14:00", "16:00")
