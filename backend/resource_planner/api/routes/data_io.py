"""
Data Import/Export API Routes

Provides endpoints for:
- Timeline export (CSV/Excel)
- Bulk availability exception import (CSV/Excel)
"""

import logging
from typing import Optional, List
from io import BytesIO, StringIO
import pandas as pd

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Query
from fastapi.responses import StreamingResponse
from pydantic import ValidationError as SchemaValidationError

from resource_planner.api.deps import get_availability_source
from resource_planner.core.exceptions import DomainError
from resource_planner.schemas.availability_exception import ExceptionCreate
from resource_planner.services.aggregator import TimelineAggregator
from resource_planner.services.availability_exceptions import AvailabilityExceptionService
from resource_planner.services.patterns import DayOfWeek
from resource_planner.services.repositories import SqlAvailabilitySource

router = APIRouter()
logger = logging.getLogger(__name__)

EXCEPTION_REQUIRED_COLUMNS = ["resource_id", "exception_date", "hours_available", "exception_type"]
EXCEPTION_OPTIONAL_COLUMNS = ["hourly_rate", "currency", "start_time", "end_time", "notes", "is_active"]
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _read_upload(filename: str, content: bytes) -> pd.DataFrame:
    # Everything is read as text so rates and hours reach validation unchanged
    if filename.endswith('.csv'):
        return pd.read_csv(BytesIO(content), dtype=str, keep_default_na=False)
    return pd.read_excel(BytesIO(content), dtype=str, keep_default_na=False)


def _cell(row, column: str) -> Optional[str]:
    value = row.get(column)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


# ============================================================================
# IMPORT ENDPOINTS
# ============================================================================

@router.post("/import/exceptions")
async def import_exceptions(
    file: UploadFile = File(...),
    source: SqlAvailabilitySource = Depends(get_availability_source),
):
    """
    Bulk import availability exceptions from CSV or Excel file.

    Required columns: resource_id, exception_date (YYYY-MM-DD), hours_available, exception_type
    Optional columns: hourly_rate, currency, start_time (HH:MM), end_time (HH:MM), notes, is_active

    Rows are validated one by one; invalid rows and rows that collide with an
    existing exception are reported and skipped.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    filename = file.filename.lower()
    if not (filename.endswith('.csv') or filename.endswith('.xlsx') or filename.endswith('.xls')):
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Supported formats: CSV, XLSX, XLS"
        )

    content = await file.read()
    try:
        df = _read_upload(filename, content)
    except pd.errors.EmptyDataError:
        raise HTTPException(status_code=400, detail="File is empty")
    except Exception as e:
        logger.exception("Could not parse uploaded exceptions file")
        raise HTTPException(status_code=400, detail=f"Error reading file: {str(e)}")

    missing_cols = [col for col in EXCEPTION_REQUIRED_COLUMNS if col not in df.columns]
    if missing_cols:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required columns: {', '.join(missing_cols)}"
        )

    service = AvailabilityExceptionService(source.scope)
    imported = 0
    errors = []

    for idx, row in df.iterrows():
        values = {col: _cell(row, col) for col in EXCEPTION_REQUIRED_COLUMNS + EXCEPTION_OPTIONAL_COLUMNS}
        if values["is_active"] is None:
            values.pop("is_active")
        else:
            values["is_active"] = values["is_active"].lower() in ['true', '1', 'yes', 'y']

        try:
            service.create(ExceptionCreate(**values))
            imported += 1
        except SchemaValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors())
            errors.append(f"Row {idx + 2}: Invalid value for {fields}")
        except DomainError as e:
            errors.append(f"Row {idx + 2}: {e.message}")

    logger.info(f"Imported {imported} of {len(df)} exception rows ({len(errors)} errors)")

    return {
        "success": True,
        "imported": imported,
        "errors_count": len(errors),
        "total_rows": len(df),
        "errors": errors[:20]
    }


# ============================================================================
# EXPORT ENDPOINTS
# ============================================================================

@router.get("/export/timeline")
async def export_timeline(
    start_date: str = Query(..., description="YYYY-MM-DD"),
    end_date: str = Query(..., description="YYYY-MM-DD"),
    resource_ids: Optional[List[int]] = Query(None),
    format: str = Query("csv", pattern="^(csv|xlsx)$"),
    source: SqlAvailabilitySource = Depends(get_availability_source),
):
    """Export the resolved timeline, one row per resource and day, to CSV or Excel."""
    timeline = TimelineAggregator(source).resolve_batch(resource_ids, start_date, end_date)

    data = []
    for item in timeline.resources:
        for day in item.days:
            data.append({
                "resource_id": item.resource.id,
                "resource_name": item.resource.name,
                "resource_type": item.resource.type,
                "date": day.date.isoformat(),
                "day_of_week": DayOfWeek.from_weekday(day.day_of_week).value,
                "hours_available": float(day.hours_available),
                "hourly_rate": float(day.hourly_rate),
                "currency": day.currency,
                "is_working_day": day.is_working_day,
                "source": day.source.value,
                "cost": float(day.cost),
                "notes": day.notes or "",
            })

    columns = [
        "resource_id", "resource_name", "resource_type", "date", "day_of_week", "hours_available",
        "hourly_rate", "currency", "is_working_day", "source", "cost", "notes",
    ]
    df = pd.DataFrame(data, columns=columns)
    filename = f"timeline_{timeline.start_date.isoformat()}_{timeline.end_date.isoformat()}"

    if format == "xlsx":
        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name='Timeline', index=False)

            # Add summary sheet
            summary_df = pd.DataFrame([
                {
                    "resource_id": item.resource.id,
                    "resource_name": item.resource.name,
                    "working_days": item.summary.working_days,
                    "exception_days": item.summary.exception_days,
                    "total_hours": float(item.summary.total_hours),
                    "total_cost": float(item.summary.total_cost),
                    "currency": item.resource.currency,
                }
                for item in timeline.resources
            ])
            summary_df.to_excel(writer, sheet_name='Summary', index=False)

        output.seek(0)
        return StreamingResponse(
            output,
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f"attachment; filename={filename}.xlsx"}
        )
    else:
        output = StringIO()
        df.to_csv(output, index=False)
        output.seek(0)
        return StreamingResponse(
            iter([output.getvalue()]),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}.csv"}
        )
