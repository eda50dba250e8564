"""Exclusion rules for project file lists.

Compiles the glob-like ``excludeFiles`` entries of a project config into
typed rules once, then classifies candidate files as included or
skipped. The first matching rule wins; there is no priority beyond the
configured order.

Supported entry forms:
- src/cache/** -> dir (the directory and everything below it)
- *.test.php, src/?/x.php -> wildcard ('*' any run of characters, '?' one)
- /elsewhere/file.php -> absolute (outside the project root)
- src/app/secret.php -> exact
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pphp_routes.core.paths import (
    is_absolute_path,
    normalize_path,
    relative_to_root,
    resolve_path,
)
from pphp_routes.exceptions import MalformedPathError, RoutingToolkitError, SchemaError

logger = logging.getLogger(__name__)

_DIR_SUFFIX = "/**"
_WILDCARD_CHARS = frozenset("*?")


class ExcludeKind(Enum):
    """How an exclusion rule is tested."""

    EXACT = "exact"
    WILDCARD = "wildcard"
    DIR = "dir"
    ABSOLUTE = "absolute"


@dataclass(frozen=True)
class ExclusionRule:
    """A compiled exclusion entry.

    Attributes:
        original: The config entry exactly as written
        kind: How the rule is tested
        normalized_pattern: Normalized entry; for DIR rules the base directory
        compiled_matcher: Regular expression, WILDCARD rules only
        case_insensitive: Compare paths ignoring case
    """

    original: str
    kind: ExcludeKind
    normalized_pattern: str
    compiled_matcher: re.Pattern[str] | None = None
    case_insensitive: bool = False

    def matches(self, key: str, absolute: str) -> bool:
        """Test the rule against a candidate.

        Args:
            key: Root-relative path, or the absolute path for files outside root.
            absolute: Resolved absolute path of the candidate.
        """
        fold = str.lower if self.case_insensitive else str
        pattern = fold(self.normalized_pattern)

        match self.kind:
            case ExcludeKind.DIR:
                folded = fold(key)
                prefix = pattern if pattern.endswith("/") else pattern + "/"
                return folded.startswith(prefix) or folded == pattern
            case ExcludeKind.WILDCARD:
                return (
                    self.compiled_matcher is not None
                    and self.compiled_matcher.fullmatch(key) is not None
                )
            case ExcludeKind.EXACT:
                return fold(key) == pattern
            case ExcludeKind.ABSOLUTE:
                return fold(absolute) == pattern


@dataclass(frozen=True)
class Included:
    """A candidate no rule matched."""

    file: str

    @property
    def excluded(self) -> bool:
        return False


@dataclass(frozen=True)
class Excluded:
    """A candidate skipped by a rule."""

    file: str
    matched_rule: ExclusionRule

    @property
    def excluded(self) -> bool:
        return True

    @property
    def kind(self) -> ExcludeKind:
        return self.matched_rule.kind

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "matchedRule": self.matched_rule.original,
            "kind": self.kind.value,
        }


ExclusionDecision = Included | Excluded


def wildcard_to_regex(pattern: str, *, case_insensitive: bool = False) -> re.Pattern[str]:
    """Translate a wildcard pattern into an anchored regular expression.

    '*' matches any run of characters (including '/'), '?' matches one
    character, and everything else matches literally.

    Examples:
        "*.test.php" -> ^.*\\.test\\.php$
        "src/v?/a.php" -> ^src/v./a\\.php$
    """
    translated = "".join(
        ".*" if char == "*" else "." if char == "?" else re.escape(char) for char in pattern
    )
    return re.compile(f"^{translated}$", re.IGNORECASE if case_insensitive else 0)


def compile_exclusion_rule(
    entry: str,
    root: str,
    *,
    case_insensitive: bool = False,
) -> ExclusionRule | None:
    """Compile one config entry.

    Args:
        entry: Raw excludeFiles entry.
        root: Resolved absolute project root.
        case_insensitive: Compare paths ignoring case.

    Returns:
        ExclusionRule, or None for an entry that is blank or names only
        the root itself ("." or "./").
    """
    pattern = normalize_path(entry.strip())
    if not pattern:
        return None

    if is_absolute_path(pattern):
        resolved = resolve_path(pattern)
        relative = relative_to_root(resolved, resolve_path(root), case_insensitive=case_insensitive)
        pattern = resolved if relative is None else relative

    if pattern.endswith(_DIR_SUFFIX):
        kind = ExcludeKind.DIR
        pattern = pattern[: -len(_DIR_SUFFIX)]
    elif _WILDCARD_CHARS & set(pattern):
        kind = ExcludeKind.WILDCARD
    elif is_absolute_path(pattern):
        kind = ExcludeKind.ABSOLUTE
    else:
        kind = ExcludeKind.EXACT

    return ExclusionRule(
        original=entry,
        kind=kind,
        normalized_pattern=pattern,
        compiled_matcher=(
            wildcard_to_regex(pattern, case_insensitive=case_insensitive)
            if kind == ExcludeKind.WILDCARD
            else None
        ),
        case_insensitive=case_insensitive,
    )


def compile_exclusion_rules(
    entries: Sequence[str],
    root: str,
    *,
    case_insensitive: bool = False,
) -> tuple[ExclusionRule, ...]:
    """Compile config entries into rules, keeping their order.

    Blank entries and entries naming only the root are dropped.

    Args:
        entries: Raw excludeFiles entries.
        root: Resolved absolute project root.
        case_insensitive: Compare paths ignoring case.

    Returns:
        Tuple of compiled rules, one per non-blank entry.

    Raises:
        SchemaError: If entries is not a list of strings.
    """
    if not isinstance(entries, list | tuple):
        raise SchemaError(f"excludeFiles must be an array of strings, got {type(entries).__name__}")

    rules: list[ExclusionRule] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, str):
            raise SchemaError(
                f"excludeFiles must be an array of strings, item {index} is {type(entry).__name__}"
            )
        rule = compile_exclusion_rule(entry, root, case_insensitive=case_insensitive)
        if rule is None:
            continue
        logger.debug(
            "Compiled exclusion rule",
            extra={"entry": entry, "kind": rule.kind.value, "pattern": rule.normalized_pattern},
        )
        rules.append(rule)

    return tuple(rules)


def evaluate_exclusion(
    rules: Sequence[ExclusionRule],
    file: str,
    root: str,
    *,
    base: str | None = None,
) -> ExclusionDecision:
    """Classify one candidate file.

    The candidate is resolved against base (default: root). When it lies
    inside root its root-relative path is the comparison key, otherwise
    its absolute path is. The inside-root check ignores case when the rules
    were compiled case-insensitive.

    Args:
        rules: Compiled rules, in config order.
        file: Candidate path, absolute or relative to base.
        root: Resolved absolute project root.
        base: Directory relative candidates are resolved from. May itself
            be relative to root.

    Returns:
        Excluded with the first matching rule, or Included.
    """
    root_abs = resolve_path(root)
    base_abs = resolve_path(base, root_abs) if base else root_abs
    absolute = resolve_path(file, base_abs)
    case_insensitive = any(rule.case_insensitive for rule in rules)
    relative = relative_to_root(absolute, root_abs, case_insensitive=case_insensitive)
    key = absolute if relative is None else relative

    for rule in rules:
        if rule.matches(key, absolute):
            return Excluded(file=key, matched_rule=rule)
    return Included(file=key)


@dataclass(frozen=True)
class FilterIssue:
    """A candidate that could not be classified."""

    file: str | None
    error: RoutingToolkitError

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "kind": type(self.error).__name__,
            "message": str(self.error),
        }


@dataclass(frozen=True)
class FilterResult:
    """Outcome of filtering a file list against exclusion rules.

    Attributes:
        base: Normalized directory candidates were resolved from
        files_count: Number of candidates received
        included: Comparison keys of files no rule matched, in input order
        skipped: Excluded decisions, in input order
        exclude_files: Configured entries, verbatim
        issues: Candidates or inputs that could not be classified
    """

    base: str
    files_count: int
    included: tuple[str, ...] = ()
    skipped: tuple[Excluded, ...] = ()
    exclude_files: tuple[str, ...] = ()
    issues: tuple[FilterIssue, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "base": self.base,
            "filesCount": self.files_count,
            "excludeCount": len(self.exclude_files),
            "included": list(self.included),
            "skipped": [s.to_dict() for s in self.skipped],
            "config": {"excludeFiles": list(self.exclude_files)},
        }
        if self.issues:
            payload["issues"] = [issue.to_dict() for issue in self.issues]
        return payload


def filter_files(
    files: Sequence[str],
    rules: Sequence[ExclusionRule],
    root: str,
    *,
    base: str | None = None,
    exclude_files: Sequence[str] | None = None,
) -> FilterResult:
    """Split candidate files into included and skipped.

    Each candidate is evaluated on its own; a bad entry becomes an issue
    and never affects the others.

    Args:
        files: Candidate paths, absolute or relative to base.
        rules: Compiled rules, in config order.
        root: Resolved absolute project root.
        base: Directory relative candidates are resolved from.
        exclude_files: Raw config entries to echo back. Defaults to the
            originals of rules.

    Returns:
        FilterResult.
    """
    root_abs = resolve_path(root)
    base_abs = resolve_path(base, root_abs) if base else root_abs
    configured = tuple(exclude_files) if exclude_files is not None else tuple(
        rule.original for rule in rules
    )

    if not isinstance(files, list | tuple) or not all(isinstance(f, str) for f in files):
        error = SchemaError("files must be an array of strings")
        logger.warning("Rejected file list", extra={"reason": str(error)})
        return FilterResult(
            base=base_abs,
            files_count=0,
            exclude_files=configured,
            issues=(FilterIssue(file=None, error=error),),
        )

    included: list[str] = []
    skipped: list[Excluded] = []
    issues: list[FilterIssue] = []

    for file in files:
        if not normalize_path(file.strip()):
            issues.append(
                FilterIssue(
                    file=file,
                    error=MalformedPathError(f"Path is empty after normalization: {file!r}"),
                )
            )
            continue

        decision = evaluate_exclusion(rules, file, root_abs, base=base_abs)
        if decision.excluded:
            logger.debug(
                "Skipped excluded file",
                extra={"file": decision.file, "rule": decision.matched_rule.original},
            )
            skipped.append(decision)
        else:
            included.append(decision.file)

    logger.info(
        "Filtered files",
        extra={
            "files_count": len(files),
            "included_count": len(included),
            "skipped_count": len(skipped),
            "rule_count": len(rules),
        },
    )

    return FilterResult(
        base=base_abs,
        files_count=len(files),
        included=tuple(included),
        skipped=tuple(skipped),
        exclude_files=configured,
        issues=tuple(issues),
    )
