import numpy as np

from meander.terrain.tin import grid_tin


class HeightMap:
    """
    Height samples on a regular grid.

    Coordinate system:
      - X: planar, left/right
      - Y: planar, forward/back
      - Z: height

    Samples outside the mask are NaN and produce no triangles.
    """

    def __init__(self, X: np.ndarray, Y: np.ndarray, Z: np.ndarray, resolution: float, mask: np.ndarray | None = None):
        if X.shape != Y.shape or X.shape != Z.shape:
            raise ValueError("X, Y, Z must have the same shape")

        self.X = X
        self.Y = Y
        self.Z = Z
        self.resolution = float(resolution)

        self.mask = mask  # True where valid
        if self.mask is None:
            self.mask = ~np.isnan(self.Z)

    @classmethod
    def rectangular(cls, width: float, height: float, resolution: float) -> "HeightMap":
        """
        Flat rectangle centered at (0,0).
        """
        x = np.arange(-width / 2, width / 2 + resolution, resolution)
        y = np.arange(-height / 2, height / 2 + resolution, resolution)
        X, Y = np.meshgrid(x, y)
        return cls(X=X, Y=Y, Z=np.zeros_like(X, dtype=float), resolution=resolution)

    @classmethod
    def circular(cls, radius: float, resolution: float) -> "HeightMap":
        """
        Flat disc centered at (0,0).
        """
        radius = float(radius)
        resolution = float(resolution)

        x = np.arange(-radius, radius + resolution, resolution)
        y = np.arange(-radius, radius + resolution, resolution)
        X, Y = np.meshgrid(x, y)

        Z = np.zeros_like(X, dtype=float)
        mask = (X**2 + Y**2) <= radius**2

        # Outside the disc -> NaN so triangulation skips it
        Z[~mask] = np.nan

        return cls(X=X, Y=Y, Z=Z, resolution=resolution, mask=mask)

    def add_planar_slope(self, slope_x: float = 0.0, slope_y: float = 0.0) -> None:
        """
        Add a planar slope: Z += slope_x * X + slope_y * Y

        slope_x, slope_y are rise per unit run.
        """
        self.Z[self.mask] = self.Z[self.mask] + slope_x * self.X[self.mask] + slope_y * self.Y[self.mask]

    def add_gaussian_bump(self, center_x: float, center_y: float, height: float, sigma: float) -> None:
        """
        Add a smooth bump/valley.
        height: peak height (negative makes a bowl)
        sigma: spread
        """
        cx = float(center_x)
        cy = float(center_y)
        h = float(height)
        s = float(sigma)
        if s <= 0:
            raise ValueError(f"sigma must be positive, got {sigma}")

        dx = self.X - cx
        dy = self.Y - cy
        bump = h * np.exp(-(dx**2 + dy**2) / (2.0 * s**2))

        self.Z[self.mask] = self.Z[self.mask] + bump[self.mask]

    def normalize(self) -> None:
        """
        Shift heights so the minimum inside the mask is 0.
        """
        min_z = np.nanmin(self.Z)
        self.Z[self.mask] = self.Z[self.mask] - min_z

    def z_range(self) -> tuple[float, float]:
        return float(np.nanmin(self.Z)), float(np.nanmax(self.Z))

    def to_tin(self) -> np.ndarray:
        """Two triangles per grid cell, as an (N, 3, 3) array."""
        return grid_tin(self.X, self.Y, self.Z)
