"""
Skyglow test configuration

Small GeoTIFFs written to tmp_path with rasterio stand in for the World
Atlas raster.
"""

import numpy as np
import pytest
import rasterio
from fastapi.testclient import TestClient
from rasterio.transform import from_origin

from skyglow.core.config import Settings
from skyglow.main import create_application
from skyglow.services.context import load_sky_context

# 10 degree WGS84 grid covering lat 75..-65 like the atlas (no polar rows)
WEST, NORTH, RES = -180.0, 75.0, 10.0
WIDTH, HEIGHT = 36, 14

BACKGROUND = 0.05
LIT_CELLS = {
    (19, 2): 1.0,    # central Europe
    (28, 6): 0.5,
    (20, 4): 0.15,
    (5, 3): 12.0,    # above the raw cap
}
NODATA_VALUE = -9999.0
NODATA_CELL = (12, 10)
NAN_CELL = (13, 10)

# Web mercator grid south-east of (0, 0), 100 km cells
MERC_RES = 100_000.0
MERC_SIZE = 10
MERC_LIT_CELL = (2, 2)
MERC_LIT_VALUE = 3.0

# Atlas resolution (30 arc seconds) over a small patch north-east of (0, 0)
FINE_RES = 1.0 / 120.0
FINE_SIZE = 240


def cell_center(col, row):
    """(lat, lon) of the centre of a WGS84 test grid cell"""
    return NORTH - RES * row - RES / 2, WEST + RES * col + RES / 2


def write_geotiff(path, data, transform, crs, nodata=None):
    height, width = data.shape
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=height,
        width=width,
        count=1,
        dtype="float32",
        crs=crs,
        transform=transform,
        nodata=nodata,
    ) as dst:
        dst.write(data.astype("float32"), 1)
    return path


def _wgs84_grid():
    data = np.full((HEIGHT, WIDTH), BACKGROUND, dtype="float32")
    for (col, row), value in LIT_CELLS.items():
        data[row, col] = value
    data[NODATA_CELL[1], NODATA_CELL[0]] = NODATA_VALUE
    data[NAN_CELL[1], NAN_CELL[0]] = np.nan
    return data


@pytest.fixture
def wgs84_raster(tmp_path):
    return write_geotiff(
        tmp_path / "atlas_wgs84.tif",
        _wgs84_grid(),
        from_origin(WEST, NORTH, RES, RES),
        "EPSG:4326",
        nodata=NODATA_VALUE,
    )


@pytest.fixture
def unreferenced_raster(tmp_path):
    return write_geotiff(
        tmp_path / "atlas_no_crs.tif",
        _wgs84_grid(),
        from_origin(WEST, NORTH, RES, RES),
        None,
    )


@pytest.fixture
def mercator_raster(tmp_path):
    data = np.zeros((MERC_SIZE, MERC_SIZE), dtype="float32")
    data[MERC_LIT_CELL[1], MERC_LIT_CELL[0]] = MERC_LIT_VALUE
    return write_geotiff(
        tmp_path / "atlas_3857.tif",
        data,
        from_origin(0.0, 0.0, MERC_RES, MERC_RES),
        "EPSG:3857",
    )


@pytest.fixture
def fine_raster(tmp_path):
    data = np.full((FINE_SIZE, FINE_SIZE), BACKGROUND, dtype="float32")
    return write_geotiff(
        tmp_path / "atlas_fine.tif",
        data,
        from_origin(0.0, FINE_SIZE * FINE_RES, FINE_RES, FINE_RES),
        "EPSG:4326",
    )


@pytest.fixture
def fine_context(fine_raster):
    context = load_sky_context(fine_raster)
    yield context
    context.close()


@pytest.fixture(params=[False, True], ids=["windowed", "preloaded"])
def sky_context(request, wgs84_raster):
    context = load_sky_context(wgs84_raster, preload=request.param)
    yield context
    context.close()


@pytest.fixture
def mercator_context(mercator_raster):
    context = load_sky_context(mercator_raster)
    yield context
    context.close()


@pytest.fixture
def population_csv(tmp_path):
    path = tmp_path / "API_EN.POP.DNST.csv"
    path.write_text('"Country Name","Country Code","2020"\n"Austria","AUT","109.3"\n')
    return path


@pytest.fixture
def app_settings(tmp_path, population_csv, wgs84_raster):
    return Settings(
        raster_path=str(wgs84_raster),
        population_csv_path=str(population_csv),
    )


@pytest.fixture
def app(app_settings, sky_context):
    return create_application(settings=app_settings, context=sky_context)


@pytest.fixture
def client(app):
    return TestClient(app)
