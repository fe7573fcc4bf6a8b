from __future__ import annotations

from typing import NewType

StoreName = NewType("StoreName", str)
ProductId = NewType("ProductId", str)
