# File: skyglow/api/routes_population.py

"""
Population density table for the map client's charts.

Served as-is from disk; the file is optional and its content is not
interpreted here.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from skyglow.api.deps import get_app_settings
from skyglow.core.config import Settings

router = APIRouter(tags=["population"])

POPULATION_CSV_ROUTE = "/API_EN.POP.DNST.csv"


@router.get(POPULATION_CSV_ROUTE)
def population_density_csv(settings: Settings = Depends(get_app_settings)):
    csv_path = Path(settings.population_csv_path)
    if not csv_path.is_file():
        raise HTTPException(status_code=404, detail="CSV file not found")

    return FileResponse(csv_path, media_type="text/csv")
