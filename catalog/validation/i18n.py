"""
i18n Validator

Checks localized-string maps (`title_i18n`, `shortTitle_i18n`,
`description_i18n`, `groupTitle_i18n`, ...) wherever they appear in a
document. These fields are optional; when present they must be a flat
mapping of BCP-47 short locale codes to non-empty strings within the
length limit of their family.

Objects that carry grouping metadata (`groupId`, `groupTitle`,
`groupTitle_i18n`) must declare both groupId and groupTitle; groupId is a
kebab-case or snake_case identifier.

A missing fallback locale is a warning unless the configuration asks for
it to be an error. Runs alongside the schema validator; it never replaces
the checks on the required base fields.
"""

import re
from typing import Any, List, Optional

from catalog.config.schema import EngineConfig
from catalog.validation.report import CATEGORY_I18N, ValidationIssue, render_value


I18N_SUFFIX = "_i18n"

# "en", "de", "de-AT", "pt-BR"
LOCALE_KEY_PATTERN = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")

# "booking-appointments", "describing_symptoms"
GROUP_ID_PATTERN = re.compile(r"^[a-z][a-z0-9]*(?:[-_][a-z0-9]+)*$")
GROUP_ID_MAX_LENGTH = 40
GROUPING_KEYS = ("groupId", "groupTitle", "groupTitle_i18n")


def is_valid_locale_key(key: Any) -> bool:
    return isinstance(key, str) and bool(LOCALE_KEY_PATTERN.match(key))


def is_valid_group_id(group_id: Any) -> bool:
    return (
        isinstance(group_id, str)
        and 0 < len(group_id) <= GROUP_ID_MAX_LENGTH
        and bool(GROUP_ID_PATTERN.match(group_id))
    )


def max_length_for(field_name: str, config: EngineConfig) -> Optional[int]:
    """Length limit for a localized field, chosen by its family."""
    base = field_name[: -len(I18N_SUFFIX)] if field_name.endswith(I18N_SUFFIX) else field_name
    if base.startswith("groupTitle"):
        return config.group_title_max_length
    if base.startswith("shortTitle"):
        return config.short_title_max_length
    lowered = base.lower()
    if "description" in lowered:
        return config.description_max_length
    if "title" in lowered:
        return config.title_max_length
    return None


class I18nValidator:
    """Validates every localized-string map of a document."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def validate_document(self, data: Any, document: str) -> List[ValidationIssue]:
        """Find and check every `*_i18n` field in `data`.

        Args:
            data: Parsed JSON document.
            document: Path used in the issue records.

        Returns:
            List of ValidationIssue (errors and warnings).
        """
        issues: List[ValidationIssue] = []
        self._walk(data, "", document, issues)
        return issues

    def _walk(self, node: Any, path: str, document: str, issues: List[ValidationIssue]) -> None:
        if isinstance(node, dict):
            if any(key in node for key in GROUPING_KEYS):
                issues.extend(self.validate_grouping(node, path, document))
            for key, value in node.items():
                child = f"{path}.{key}" if path else str(key)
                if isinstance(key, str) and key.endswith(I18N_SUFFIX):
                    issues.extend(self.validate_map(value, key, child, document))
                else:
                    self._walk(value, child, document, issues)
        elif isinstance(node, list):
            for idx, value in enumerate(node):
                self._walk(value, f"{path}[{idx}]", document, issues)

    def validate_grouping(self, node: dict, path: str, document: str) -> List[ValidationIssue]:
        """Check the groupId/groupTitle pair of an object carrying grouping metadata.

        groupTitle_i18n is checked as a localized map by `_walk`.
        """
        issues: List[ValidationIssue] = []
        limit = self.config.group_title_max_length

        def error(key: str, message: str, **kwargs) -> None:
            issues.append(ValidationIssue(
                level="error",
                category=CATEGORY_I18N,
                document=document,
                field=f"{path}.{key}" if path else key,
                message=message,
                **kwargs,
            ))

        has_id = "groupId" in node
        has_title = "groupTitle" in node
        if has_title and not has_id:
            error("groupId", "groupTitle is present but groupId is missing")
        if has_id and not has_title:
            error("groupTitle", "groupId is present but groupTitle is missing")

        if has_id:
            group_id = node["groupId"]
            if not isinstance(group_id, str):
                error("groupId", "groupId must be a string", expected="string", actual=render_value(group_id))
            elif not is_valid_group_id(group_id):
                error("groupId",
                      f"groupId \"{group_id}\" is invalid. Must be kebab-case or snake_case, "
                      f"max {GROUP_ID_MAX_LENGTH} chars",
                      expected="[a-z][a-z0-9]*([-_][a-z0-9]+)*", actual=group_id)

        if has_title:
            title = node["groupTitle"]
            if not isinstance(title, str):
                error("groupTitle", "groupTitle must be a string", expected="string", actual=render_value(title))
            elif not title.strip():
                error("groupTitle", "groupTitle must be non-empty")
            elif len(title) > limit:
                error("groupTitle", f"groupTitle exceeds max length ({len(title)} > {limit})",
                      expected=f"<= {limit} chars", actual=str(len(title)))

        return issues

    def validate_map(
        self,
        value: Any,
        field_name: str,
        field_path: str,
        document: str,
    ) -> List[ValidationIssue]:
        """Validate one localized-string map.

        Args:
            value: The map found in the document.
            field_name: Key of the map (selects the length family).
            field_path: Full field path for issue records.
            document: Path used in the issue records.
        """
        issues: List[ValidationIssue] = []

        def issue(level: str, field_path_: str, message: str, **kwargs) -> None:
            issues.append(ValidationIssue(
                level=level,
                category=CATEGORY_I18N,
                document=document,
                field=field_path_,
                message=message,
                **kwargs,
            ))

        if not isinstance(value, dict):
            issue("error", field_path, f"{field_name} must be a mapping from locale code to string",
                  expected="object", actual=render_value(value))
            return issues
        if not value:
            issue("error", field_path, f"{field_name} must have at least one locale if present")
            return issues

        limit = max_length_for(field_name, self.config)

        for locale, text in value.items():
            entry = f"{field_path}.{locale}"
            if not is_valid_locale_key(locale):
                issue("error", entry,
                      f"{field_name} has invalid locale key '{locale}'. "
                      "Must be BCP-47 short form (e.g. \"en\", \"de\", \"de-AT\")",
                      expected="[a-z]{2}(-[A-Z]{2})?", actual=str(locale))
                continue
            if not isinstance(text, str):
                issue("error", entry, f"{field_name}[\"{locale}\"] must be a string",
                      expected="string", actual=render_value(text))
                continue
            trimmed = text.strip()
            if not trimmed:
                issue("error", entry, f"{field_name}[\"{locale}\"] must be a non-empty string")
                continue
            if limit is not None and len(trimmed) > limit:
                issue("error", entry,
                      f"{field_name}[\"{locale}\"] exceeds max length ({len(trimmed)} > {limit})",
                      expected=f"<= {limit} chars", actual=str(len(trimmed)))
            if text != trimmed:
                issue("warning", entry, f"{field_name}[\"{locale}\"] has leading/trailing whitespace")

        fallback = self.config.fallback_locale
        if fallback not in value:
            level = "error" if self.config.require_fallback_locale else "warning"
            issue(level, field_path, f"{field_name} has no entry for fallback locale \"{fallback}\"",
                  expected=fallback, actual=", ".join(sorted(str(k) for k in value)),
                  suggestion=f"Add a \"{fallback}\" entry.")

        return issues
