"""Type registry and borrowed-data propagation.

References between records are stored by name and only resolved when
queried, so a field may name a record that appears later in the document.
"""

import logging
from collections.abc import Iterable, Iterator

from restdoc_codegen.errors import UnresolvedReferenceError
from restdoc_codegen.parser.base import EnumEntity, RecordEntity, TypeDescriptor, TypeKind

logger = logging.getLogger(__name__)


class TypeRegistry:
    """All extracted records by name, in document order, plus known enum names."""

    def __init__(self, records: Iterable[RecordEntity] = (), enums: Iterable[EnumEntity] = ()):
        self._records: dict[str, RecordEntity] = {}
        self._enums: dict[str, EnumEntity] = {}
        self._borrowed: frozenset[str] | None = None
        for enum in enums:
            self.add_enum(enum)
        for record in records:
            self.add_record(record)

    def add_record(self, record: RecordEntity) -> None:
        if record.name in self._records:
            logger.warning("Duplicate definition %s replaces the earlier one", record.name)
        self._records[record.name] = record
        self._borrowed = None

    def add_enum(self, enum: EnumEntity) -> None:
        self._enums[enum.name] = enum
        self._borrowed = None

    def get(self, name: str) -> RecordEntity | None:
        return self._records.get(name)

    def records(self) -> list[RecordEntity]:
        return list(self._records.values())

    def __contains__(self, name: object) -> bool:
        return name in self._records or name in self._enums

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def resolve(self, name: str) -> RecordEntity | EnumEntity:
        """Look up a referenced entity; raises UnresolvedReferenceError if unknown."""
        if name in self._records:
            return self._records[name]
        if name in self._enums:
            return self._enums[name]
        raise UnresolvedReferenceError(name)

    def check_references(self, descriptors: Iterable[TypeDescriptor]) -> None:
        for descriptor in descriptors:
            if descriptor.is_reference:
                self.resolve(descriptor.name)

    # -- borrow propagation ---------------------------------------------------

    def borrowed_names(self) -> frozenset[str]:
        """Names of all records that contain borrowed text, directly or transitively.

        Computed once as a least fixpoint: start from records with a borrowed
        field, then repeatedly add records referencing a borrowed record.
        Reference cycles without a borrowed member stay unborrowed.
        """
        if self._borrowed is not None:
            return self._borrowed

        # referenced name -> records that reference it
        dependents: dict[str, set[str]] = {}
        worklist: list[str] = []
        borrowed: set[str] = set()
        for record in self._records.values():
            for field in record.fields:
                if field.type.kind is TypeKind.BORROWED:
                    if record.name not in borrowed:
                        borrowed.add(record.name)
                        worklist.append(record.name)
                elif field.type.is_reference:
                    self.resolve(field.type.name)
                    dependents.setdefault(field.type.name, set()).add(record.name)

        while worklist:
            name = worklist.pop()
            for dependent in dependents.get(name, ()):
                if dependent not in borrowed:
                    borrowed.add(dependent)
                    worklist.append(dependent)

        self._borrowed = frozenset(borrowed)
        logger.debug("Borrowed records: %s", sorted(self._borrowed))
        return self._borrowed

    def is_borrowed(self, name: str) -> bool:
        """Whether the named entity needs a lifetime. Enums never do."""
        entity = self.resolve(name)
        if isinstance(entity, EnumEntity):
            return False
        return name in self.borrowed_names()

    def descriptor_is_borrowed(self, descriptor: TypeDescriptor) -> bool:
        if descriptor.kind is TypeKind.BORROWED:
            return True
        if descriptor.is_reference:
            return self.is_borrowed(descriptor.name)
        return False
