from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

# (row_index, col_index) into the live grid
Handle = Tuple[int, int]
