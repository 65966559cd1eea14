"""
Skyglow exceptions.

Only startup failures are meant to escape to the caller; per-request
sampling problems are absorbed into sentinel values by the services.
"""


class SkyglowError(Exception):
    """Base exception for skyglow"""

    pass


class RasterLoadError(SkyglowError):
    """The light-emission raster could not be opened or is unusable"""

    pass


class TransformerBuildError(SkyglowError):
    """No coordinate transform could be built for the raster CRS"""

    pass


class CellOutOfBoundsError(SkyglowError, IndexError):
    """A cell read fell outside the raster grid"""

    def __init__(self, col: int, row: int, width: int, height: int):
        self.col = col
        self.row = row
        self.width = width
        self.height = height
        super().__init__(
            f"Cell (col={col}, row={row}) outside raster of {width}x{height}"
        )
