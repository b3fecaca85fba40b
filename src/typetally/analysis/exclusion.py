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

"""Noise suppression for trace records.

Excluded records still count towards a file's ``total`` but never reach the
classifier. A record is excluded when any rule below fires:

- its declaring path (``firstDeclaration.path``, else
  ``referenceLocation.path``) lives in ``node_modules``, is a test file or
  test utility, is a ``config.ts`` file, or is a ``.d.ts`` declaration file;
- its display text is an arrow-function signature (contains ``=>``);
- its symbol is ``globalThis``;
- it carries a ``*Literal`` flag other than ``StringLiteral`` and
  ``TemplateLiteral`` (number, boolean, enum, and bigint literals).

Rules are independent. Turning one off in an ``ExclusionPolicy`` never
changes the outcome of another.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Final

from typetally.compat import StrEnum
from typetally.core.flags import CLASSIFIED_LITERAL_FLAGS, LITERAL_SUFFIX

if TYPE_CHECKING:
    from typetally.core.records import TypeRecord


class ExclusionReason(StrEnum):
    """Rule that caused a record to be excluded."""

    NODE_MODULES = "node_modules"
    TEST_FILES = "test_files"
    CONFIG_FILES = "config_files"
    DECLARATION_FILES = "declaration_files"
    EXTRA_PATH_PATTERN = "extra_path_pattern"
    ARROW_FUNCTIONS = "arrow_functions"
    GLOBAL_THIS = "global_this"
    NON_STRING_LITERALS = "non_string_literals"


PATH_RULES: Final[Mapping[ExclusionReason, re.Pattern[str]]] = {
    ExclusionReason.NODE_MODULES: re.compile(r"node_modules"),
    ExclusionReason.TEST_FILES: re.compile(r"(?:test\.ts|test\.utils\.ts|integration\.ts)$"),
    ExclusionReason.CONFIG_FILES: re.compile(r"config\.ts$"),
    ExclusionReason.DECLARATION_FILES: re.compile(r"\.d\.ts$"),
}
ARROW_FUNCTION_DISPLAY: Final[re.Pattern[str]] = re.compile(r"=>")
GLOBAL_SYMBOL_NAME: Final[str] = "globalThis"


def _default_path_rules() -> frozenset[ExclusionReason]:
    return frozenset(PATH_RULES)


@dataclass(frozen=True, slots=True)
class ExclusionPolicy:
    """Set of exclusion rules applied to valid trace records.

    Attributes:
        path_rules: Built-in path rules that are switched on.
        extra_path_patterns: Additional regexes searched in the declaring path.
        arrow_functions: Exclude records whose display contains ``=>``.
        global_this: Exclude the ``globalThis`` symbol.
        non_string_literals: Exclude number, boolean, enum, and bigint literals.
    """

    path_rules: frozenset[ExclusionReason] = field(default_factory=_default_path_rules)
    extra_path_patterns: tuple[re.Pattern[str], ...] = ()
    arrow_functions: bool = True
    global_this: bool = True
    non_string_literals: bool = True

    def without(self, *reasons: ExclusionReason) -> ExclusionPolicy:
        """Return a copy of the policy with the given rules switched off."""
        dropped = frozenset(reasons)
        return replace(
            self,
            path_rules=self.path_rules - dropped,
            extra_path_patterns=() if ExclusionReason.EXTRA_PATH_PATTERN in dropped else self.extra_path_patterns,
            arrow_functions=self.arrow_functions and ExclusionReason.ARROW_FUNCTIONS not in dropped,
            global_this=self.global_this and ExclusionReason.GLOBAL_THIS not in dropped,
            non_string_literals=self.non_string_literals and ExclusionReason.NON_STRING_LITERALS not in dropped,
        )


DEFAULT_POLICY: Final[ExclusionPolicy] = ExclusionPolicy()


def _is_excluded_literal(flag: str) -> bool:
    return flag.endswith(LITERAL_SUFFIX)


def _iter_reasons(record: TypeRecord, policy: ExclusionPolicy) -> Iterator[ExclusionReason]:
    path = record.declaration_path
    if path is not None:
        for reason, pattern in PATH_RULES.items():
            if reason in policy.path_rules and pattern.search(path):
                yield reason
        if any(pattern.search(path) for pattern in policy.extra_path_patterns):
            yield ExclusionReason.EXTRA_PATH_PATTERN
    display = record.display
    if policy.arrow_functions and display is not None and ARROW_FUNCTION_DISPLAY.search(display):
        yield ExclusionReason.ARROW_FUNCTIONS
    if policy.global_this and record.symbol_name == GLOBAL_SYMBOL_NAME:
        yield ExclusionReason.GLOBAL_THIS
    if (
        policy.non_string_literals
        and record.find_flag(_is_excluded_literal, excluding=CLASSIFIED_LITERAL_FLAGS) is not None
    ):
        yield ExclusionReason.NON_STRING_LITERALS


def exclusion_reasons(
    record: TypeRecord,
    policy: ExclusionPolicy = DEFAULT_POLICY,
) -> tuple[ExclusionReason, ...]:
    """Return every exclusion rule that fires for `record`.

    Args:
        record: Valid trace record.
        policy: Rules to apply.

    Returns:
        Reasons in evaluation order; empty when the record is kept.
    """
    return tuple(_iter_reasons(record, policy))


def is_excluded(record: TypeRecord, policy: ExclusionPolicy = DEFAULT_POLICY) -> bool:
    """Return True when any rule of `policy` excludes `record`."""
    return next(_iter_reasons(record, policy), None) is not None


__all__ = [
    "ARROW_FUNCTION_DISPLAY",
    "DEFAULT_POLICY",
    "GLOBAL_SYMBOL_NAME",
    "PATH_RULES",
    "ExclusionPolicy",
    "ExclusionReason",
    "exclusion_reasons",
    "is_excluded",
]
