"""Named trajectory layout."""

from typing import Mapping, Union
import numpy as np
from numpy.typing import NDArray


class NamedTrajectory:
    """
    Trajectory of named variables stored knot point by knot point.

    Each knot point vector z_t is the concatenation of the named variables
    in insertion order; `components[name]` gives their positions in z_t.
    The timestep is either a fixed scalar or the name of a one-dimensional
    variable, in which case it is optimized with the rest of the trajectory.
    """

    def __init__(
        self,
        data: Mapping[str, NDArray],
        timestep: Union[str, float],
    ):
        """
        Initialize trajectory.

        Args:
            data: Variable name → values of shape (dim, T)
            timestep: Name of the timestep variable, or a fixed timestep
        """
        if not data:
            raise ValueError("trajectory needs at least one variable")

        self._data: dict[str, NDArray] = {}
        for name, values in data.items():
            values = np.asarray(values, dtype=float)
            if values.ndim == 1:
                values = values[None, :]
            if values.ndim != 2:
                raise ValueError(f"variable {name!r} must have shape (dim, T)")
            self._data[name] = values

        lengths = {values.shape[1] for values in self._data.values()}
        if len(lengths) != 1:
            raise ValueError(f"variables disagree on number of knot points: {lengths}")

        if isinstance(timestep, str):
            if timestep not in self._data:
                raise KeyError(f"timestep variable {timestep!r} not in trajectory")
            if self._data[timestep].shape[0] != 1:
                raise ValueError("timestep variable must be one-dimensional")
        self.timestep = timestep

        self.dims: dict[str, int] = {}
        self.components: dict[str, NDArray] = {}
        offset = 0
        for name, values in self._data.items():
            self.dims[name] = values.shape[0]
            self.components[name] = np.arange(offset, offset + values.shape[0])
            offset += values.shape[0]

    @property
    def names(self) -> tuple[str, ...]:
        """Variable names in knot point order."""
        return tuple(self._data)

    @property
    def dim(self) -> int:
        """Knot point dimension."""
        return sum(self.dims.values())

    @property
    def T(self) -> int:
        """Number of knot points."""
        return next(iter(self._data.values())).shape[1]

    @property
    def free_time(self) -> bool:
        """Whether the timestep is a trajectory variable."""
        return isinstance(self.timestep, str)

    def __getitem__(self, name: str) -> NDArray:
        """Values of one variable, shape (dim, T)."""
        return self._data[name]

    def knot_point(self, t: int) -> NDArray:
        """Knot point vector z_t."""
        return np.concatenate([values[:, t] for values in self._data.values()])

    @property
    def datavec(self) -> NDArray:
        """All knot points concatenated, length dim * T."""
        return np.concatenate([self.knot_point(t) for t in range(self.T)])
