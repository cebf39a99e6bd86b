"""Built-in sample roster used by the ``sample`` command and the tests."""

import copy
from typing import Any

DEFAULT_FACULTY: list[dict[str, Any]] = [
    {"id": "f1", "name": "Dr. Alan Turing", "maxHoursPerDay": 4, "maxConsecutiveHours": 2},
    {"id": "f2", "name": "Dr. Grace Hopper", "maxHoursPerDay": 3, "maxConsecutiveHours": 2},
    {"id": "f3", "name": "Dr. Ada Lovelace", "maxHoursPerDay": 4, "maxConsecutiveHours": 2},
]

DEFAULT_CLASSES: list[dict[str, Any]] = [
    {
        "id": "c1",
        "name": "CS101",
        "subjects": [
            {"id": "s1", "name": "Algorithms", "facultyId": "f1", "weeklyHours": 4},
            {"id": "s2", "name": "Compilers", "facultyId": "f2", "weeklyHours": 3},
            {"id": "s3", "name": "Data Structures", "facultyId": "f1", "weeklyHours": 3},
        ],
        "unavailableSlots": [{"day": "Wednesday", "period": 3}],
    },
    {
        "id": "c2",
        "name": "CS202",
        "subjects": [
            {"id": "s4", "name": "Operating Systems", "facultyId": "f2", "weeklyHours": 3},
            {"id": "s5", "name": "Discrete Maths", "facultyId": "f3", "weeklyHours": 4},
            {"id": "s6", "name": "Intro to AI", "facultyId": "f1", "weeklyHours": 3},
        ],
        "unavailableSlots": [],
    },
]


def sample_problem_data() -> dict[str, Any]:
    """Get a fresh copy of the sample roster in problem-file shape."""
    return {
        "faculty": copy.deepcopy(DEFAULT_FACULTY),
        "classes": copy.deepcopy(DEFAULT_CLASSES),
    }
