"""
Staff affiliation index for department staff listings.

A department's people are its direct staff plus everyone working in one of
its laboratories. The same person can appear in several places, so the
listing is keyed by staff id and each entry accumulates laboratory
affiliations. The index is rebuilt from the rows passed in on every call.
"""

from typing import Any, Dict, Iterable, List, Mapping

Row = Mapping[str, Any]


def build_affiliation_index(
    department_staff: Iterable[Row],
    laboratories: Iterable[Row],
) -> Dict[Any, Dict[str, Any]]:
    """
    Map staff id → staff entry with affiliations.

    Args:
        department_staff: staff rows directly attached to the department
        laboratories: laboratory rows, each with "id", "name" and "members",
            a list of {"staff": <staff row>, "position": str | None}

    Each entry is the staff row plus:
        is_department_staff: True when the person is direct department staff
        laboratories: [{"id", "name", "position"}] in laboratory order

    Entries keep first-seen order: direct staff first, then laboratory-only
    staff as they are encountered.
    """
    index: Dict[Any, Dict[str, Any]] = {}

    for staff in department_staff:
        staff_id = staff.get("id")
        if staff_id is None or staff_id in index:
            continue
        index[staff_id] = {**staff, "laboratories": [], "is_department_staff": True}

    for laboratory in laboratories:
        members: List[Row] = laboratory.get("members") or []
        for member in members:
            staff = member.get("staff")
            if not staff or staff.get("id") is None:
                continue
            entry = index.setdefault(
                staff["id"],
                {**staff, "laboratories": [], "is_department_staff": False},
            )
            entry["laboratories"].append(
                {
                    "id": laboratory.get("id"),
                    "name": laboratory.get("name"),
                    "position": member.get("position"),
                }
            )

    return index
