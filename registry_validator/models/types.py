from typing import Literal

# type aliases for clarity
ShapeName = Literal["simple", "standard"]
