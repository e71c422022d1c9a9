"""Exception types raised by the simulator core."""


class DecodeSimError(Exception):
    """Base class for simulator errors."""
    pass


class OutOfBoundsError(DecodeSimError, ValueError):
    """A grid coordinate outside ``[0, grid_size - 1]`` was requested."""

    def __init__(self, col: int, row: int, grid_size: int):
        super().__init__(
            f"Tile ({col}, {row}) is outside a {grid_size}x{grid_size} field"
        )
        self.col = col
        self.row = row
        self.grid_size = grid_size
