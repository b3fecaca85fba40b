# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Version-tolerant imports shared by typetally modules.

typetally supports Python 3.10 onwards. Anything that moved into the standard
library after 3.10 (``tomllib``, ``enum.StrEnum``, ``typing.override``,
``typing.Self``) is resolved here once so the rest of the package can import
stable names without version checks.

Attributes:
    tomllib: Stdlib TOML parser on 3.11+, the ``tomli`` backport before that.
    StrEnum: String-valued enum base class.
    UTC: Timezone instance for UTC timestamps.
    Self, TypedDict, Unpack, override: Typing helpers, taken from
        ``typing_extensions`` where the running interpreter lacks them.
"""

from __future__ import annotations

import enum as _enum
from datetime import timezone
from typing import TYPE_CHECKING

UTC = timezone.utc

if TYPE_CHECKING:
    import tomli as tomllib
    from typing_extensions import Self, TypedDict, Unpack, override

    class StrEnum(str, _enum.Enum):
        """Type-checker view of ``enum.StrEnum``."""

else:
    try:
        import tomllib  # py311+
    except ModuleNotFoundError:  # py<3.11
        import tomli as tomllib

    try:
        from typing import Self, Unpack  # py>=3.11
    except ImportError:
        from typing_extensions import Self, Unpack

    try:
        from typing import TypedDict, override  # py>=3.12
    except ImportError:
        from typing_extensions import TypedDict, override

    if hasattr(_enum, "StrEnum"):
        StrEnum = _enum.StrEnum
    else:

        class StrEnum(str, _enum.Enum):
            """Backport of ``enum.StrEnum`` for Python 3.10."""

            def __str__(self) -> str:
                return str(self.value)


__all__ = [
    "UTC",
    "Self",
    "StrEnum",
    "TypedDict",
    "Unpack",
    "override",
    "tomllib",
]
