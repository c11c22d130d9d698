"""CSV export endpoint."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from pydantic import ValidationError
from sqlalchemy.orm import Session

from volunteerhub.api.deps import TIMEZONE, get_current_staff, get_db
from volunteerhub.core.exceptions import InvalidInputError
from volunteerhub.schemas import ExportFilters
from volunteerhub.services.export import build_export

router = APIRouter(dependencies=[Depends(get_current_staff)])


def export_filters(
    profession: Optional[str] = None,
    min_age: Optional[int] = None,
    max_age: Optional[int] = None,
    min_hours: Optional[float] = None,
    max_hours: Optional[float] = None,
    min_bags: Optional[int] = None,
    max_bags: Optional[int] = None,
    date_range: str = Query("all_time"),
) -> ExportFilters:
    try:
        return ExportFilters(
            profession=profession or None,
            min_age=min_age,
            max_age=max_age,
            min_hours=min_hours,
            max_hours=max_hours,
            min_bags=min_bags,
            max_bags=max_bags,
            date_range=date_range,
        )
    except ValidationError as e:
        raise InvalidInputError([err["msg"] for err in e.errors()])


@router.get("/users.csv")
async def export_users(filters: ExportFilters = Depends(export_filters), db: Session = Depends(get_db)):
    """Download matching users as CSV; counts are in X-Export-Count / X-Export-Failed."""
    result = build_export(db, filters, tz=TIMEZONE)
    return Response(
        content=result.content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Export-Count": str(result.exported),
            "X-Export-Failed": str(result.failed),
        },
    )
