"""RecordService — load, query, edit, validate, and summarise vendor records.

Each method maps one user-facing operation onto the workspace triad and
wraps the outcome in a :class:`ServiceResult`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from vendorctl.config.models import ValidationConfig
from vendorctl.domain.matchers import get_matcher
from vendorctl.domain.records import stringify
from vendorctl.domain.sorters import get_sorter
from vendorctl.domain.statistics import group_by, summarize
from vendorctl.domain.validation import (
    Validator,
    email_rule,
    max_length_rule,
    min_length_rule,
    phone_rule,
    required_rule,
    url_rule,
)
from vendorctl.engine.history import (
    AddVendorCommand,
    Command,
    DeleteVendorCommand,
    UpdateVendorCommand,
)
from vendorctl.engine.store import is_hashable_key
from vendorctl.infrastructure.loader import (
    RecordFileError,
    read_operations,
    read_records,
    write_records,
)
from vendorctl.services.base import BaseService
from vendorctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

OPERATION_KINDS = ("add", "update", "delete", "undo", "redo")


class RecordService(BaseService):
    """Record operations over one workspace."""

    # ------------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------------

    def load(self, path: Path) -> ServiceResult:
        """Replace the workspace records with the contents of *path*."""
        op = "load_records"
        try:
            records = read_records(path)
        except FileNotFoundError:
            return ServiceResult.failure(op, "FILE_NOT_FOUND", f"No such file: {path}")
        except (RecordFileError, OSError, UnicodeError) as exc:
            return ServiceResult.failure(op, "LOAD_FAILED", str(exc), path=str(path))

        ws = self._workspace
        ws.load(records)
        loaded = len(ws.store)
        logger.debug("Loaded %d of %d records from %s", loaded, len(records), path)
        warnings: list[str] = []
        skipped = len(records) - loaded
        if skipped:
            warnings.append(
                f"Skipped {skipped} record(s) with a missing, unhashable or duplicate "
                f"'{ws.store.primary_key}'"
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "count": loaded,
                "skipped": skipped,
                "primary_key": ws.store.primary_key,
            },
            warnings=warnings,
        )

    def save(self, path: Path) -> ServiceResult:
        """Write the current store contents to *path*."""
        op = "save_records"
        with self._workspace.locked() as ws:
            records = ws.store.get_all()
        try:
            write_records(path, records)
        except (RecordFileError, OSError) as exc:
            return ServiceResult.failure(op, "SAVE_FAILED", str(exc), path=str(path))
        return ServiceResult(ok=True, op=op, data={"path": str(path), "count": len(records)})

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(
        self,
        *,
        filters: Mapping[str, str] | None = None,
        sort: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        matcher: str | None = None,
        sorter: str | None = None,
    ) -> ServiceResult:
        """Apply filters and sort to the view and return the derived records."""
        op = "query_records"
        with self._workspace.locked() as ws:
            error = self._configure_view(op, filters, sort, descending, matcher, sorter)
            if error is not None:
                return error

            view = ws.view
            items = view.derived_view
            if limit is not None:
                items = items[: max(limit, 0)]
            spec = view.sort_spec
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "items": items,
                    "count": len(items),
                    "total": view.total_count,
                    "filtered": view.filtered_count,
                    "filters": view.filters,
                    "sort": spec.model_dump(mode="json") if spec else None,
                    "matcher": view.matcher.name,
                    "sorter": view.sorter.name,
                    "primary_key": ws.store.primary_key,
                },
            )

    def stats(
        self,
        field: str,
        *,
        group: str | None = None,
        filters: Mapping[str, str] | None = None,
        matcher: str | None = None,
    ) -> ServiceResult:
        """Summarise *field* over the filtered records, optionally per group."""
        op = "record_stats"
        with self._workspace.locked() as ws:
            error = self._configure_view(op, filters, None, False, matcher, None)
            if error is not None:
                return error
            records = ws.view.derived_view

        data: dict[str, Any] = {"field": field, "summary": summarize(records, field)}
        if group is not None:
            data["group_by"] = group
            data["groups"] = {
                stringify(key): summarize(members, field)
                for key, members in group_by(records, group).items()
            }
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, config: ValidationConfig | None = None) -> ServiceResult:
        """Check every record against the configured field rules.

        Issues are reported in ``data["issues"]`` and as warnings; the
        result is still ``ok``.
        """
        op = "validate_records"
        validator = build_validator(config or self._workspace.settings.validation)
        with self._workspace.locked() as ws:
            records = ws.store.get_all()
            primary_key = ws.store.primary_key

        issues: list[dict[str, Any]] = []
        invalid = 0
        for record in records:
            errors = validator.validate_record(record)
            if errors:
                invalid += 1
            for field, message in errors.items():
                issues.append({"id": record.get(primary_key), "field": field, "message": message})

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "checked": len(records),
                "valid": len(records) - invalid,
                "invalid": invalid,
                "rules": validator.fields,
                "issues": issues,
            },
            warnings=[f"{i['id']}: {i['field']}: {i['message']}" for i in issues],
        )

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def apply(self, operations: Sequence[Any]) -> ServiceResult:
        """Run a script of add/update/delete/undo/redo operations in order.

        The whole script is checked for shape before anything runs, so a
        malformed entry leaves the store untouched. Lookup misses and empty
        undo/redo are skipped with a warning.
        """
        op = "apply_operations"
        for index, entry in enumerate(operations):
            problem = _operation_problem(entry)
            if problem is not None:
                return ServiceResult.failure(
                    op, "INVALID_OPERATION", f"Operation {index}: {problem}", index=index
                )

        warnings: list[str] = []
        applied = 0
        with self._workspace.locked() as ws:
            for index, entry in enumerate(operations):
                skip_reason = self._run_operation(entry)
                if skip_reason is None:
                    applied += 1
                else:
                    warnings.append(f"Operation {index} ({entry['op']}) skipped: {skip_reason}")

            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "applied": applied,
                    "skipped": len(operations) - applied,
                    "count": len(ws.store),
                    "undo_depth": ws.history.undo_depth,
                    "redo_depth": ws.history.redo_depth,
                },
                warnings=warnings,
            )

    def apply_script(self, path: Path) -> ServiceResult:
        """Read an operation script from *path* and :meth:`apply` it."""
        op = "apply_operations"
        try:
            operations = read_operations(path)
        except FileNotFoundError:
            return ServiceResult.failure(op, "FILE_NOT_FOUND", f"No such file: {path}")
        except (RecordFileError, OSError, UnicodeError) as exc:
            return ServiceResult.failure(op, "LOAD_FAILED", str(exc), path=str(path))
        return self.apply(operations)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _configure_view(
        self,
        op: str,
        filters: Mapping[str, str] | None,
        sort: str | None,
        descending: bool,
        matcher: str | None,
        sorter: str | None,
    ) -> ServiceResult | None:
        view = self._workspace.view
        try:
            if matcher is not None:
                view.set_matcher(get_matcher(matcher))
            if sorter is not None:
                view.set_sorter(get_sorter(sorter))
        except KeyError as exc:
            return ServiceResult.failure(op, "UNKNOWN_STRATEGY", str(exc.args[0]))

        view.clear_filters()
        for field, term in (filters or {}).items():
            view.set_filter(field, term)

        view.clear_sort()
        if sort:
            view.set_sort(sort)
            if descending:
                view.set_sort(sort)
        return None

    def _run_operation(self, entry: Mapping[str, Any]) -> str | None:
        """Execute one operation. Returns a skip reason, or None if applied."""
        ws = self._workspace
        store = ws.store
        kind = entry["op"]

        if kind == "undo":
            return None if ws.undo() is not None else "nothing to undo"
        if kind == "redo":
            return None if ws.redo() is not None else "nothing to redo"

        command: Command
        if kind == "add":
            record = entry["record"]
            key = record.get(store.primary_key)
            if key is None:
                return f"record has no '{store.primary_key}'"
            if not is_hashable_key(key):
                return f"{store.primary_key}={key!r} is not a usable identity key"
            if key in store:
                return f"{store.primary_key}={key!r} already exists"
            command = AddVendorCommand(store, record)
        else:
            record_id = entry["id"]
            if record_id not in store:
                return f"no record with {store.primary_key}={record_id!r}"
            if kind == "update":
                new_key = entry["fields"].get(store.primary_key, record_id)
                if new_key != record_id:
                    return f"cannot change {store.primary_key} from {record_id!r} to {new_key!r}"
                command = UpdateVendorCommand(store, record_id, entry["fields"])
            else:
                command = DeleteVendorCommand(store, record_id)

        ws.execute(command)
        return None


def _operation_problem(entry: Any) -> str | None:
    """Describe what is wrong with *entry*, or None if it is well formed."""
    if not isinstance(entry, Mapping):
        return "must be an object"
    kind = entry.get("op")
    if kind not in OPERATION_KINDS:
        return f"unknown op {kind!r} (expected one of {', '.join(OPERATION_KINDS)})"
    if kind == "add" and not isinstance(entry.get("record"), Mapping):
        return "'add' needs a 'record' object"
    if kind in ("update", "delete") and "id" not in entry:
        return f"'{kind}' needs an 'id'"
    if kind == "update" and not isinstance(entry.get("fields"), Mapping):
        return "'update' needs a 'fields' object"
    return None


def build_validator(config: ValidationConfig) -> Validator:
    """Translate the ``[validation]`` section into a Validator.

    Rules for one field run in the order required, email, phone, url,
    min length, max length.
    """
    validator = Validator()
    for field in config.required:
        validator.add_rule(field, required_rule())
    for field in config.email:
        validator.add_rule(field, email_rule())
    for field in config.phone:
        validator.add_rule(field, phone_rule())
    for field in config.url:
        validator.add_rule(field, url_rule())
    for field, minimum in config.min_length.items():
        validator.add_rule(field, min_length_rule(minimum))
    for field, maximum in config.max_length.items():
        validator.add_rule(field, max_length_rule(maximum))
    return validator
