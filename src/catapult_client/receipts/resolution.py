"""
Alias resolution index.

Answers "which concrete address or mosaic did this alias point to at this
position in the block?" from the block's resolution statements. For each alias
the entries are sorted by ReceiptSource; the binding in force at a source is the
entry with the greatest source not after it (predecessor search).
"""

from __future__ import annotations
import logging
from bisect import bisect_right
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..enums import ResolutionType
from ..model.address import Address, unresolved_address_from_bytes
from ..model.ids import EntityId, MosaicId, NamespaceId
from ..runtime.errors import InvalidStatementError, NoApplicableBindingError, UnresolvedAliasNotFoundError
from .model import ReceiptSource, ResolutionEntry, ResolutionStatement

logger = logging.getLogger(__name__)

SourceKey = Tuple[int, int]
Resolved = Union[Address, MosaicId]


class _Bindings:
    """Sorted sources of one alias with the value each one binds."""

    __slots__ = ("keys", "values")

    def __init__(self, entries: List[ResolutionEntry], alias):
        ordered = sorted(entries, key=lambda e: e.source.key())
        keys = tuple(e.source.key() for e in ordered)
        for previous, current in zip(keys, keys[1:]):
            if previous == current:
                raise InvalidStatementError(
                    f"Alias {alias} has two resolution entries for source {current}",
                    details={"alias": str(alias), "source": current},
                )
        self.keys: Tuple[SourceKey, ...] = keys
        self.values: Tuple[Resolved, ...] = tuple(e.resolved for e in ordered)

    def at(self, source: ReceiptSource) -> Optional[Resolved]:
        position = bisect_right(self.keys, source.key())
        if position == 0:
            return None
        return self.values[position - 1]


def _alias_label(alias) -> str:
    if isinstance(alias, Address):
        return alias.plain()
    return str(alias)


class AliasResolutionIndex:
    """
    Read-only lookup from (alias, receipt source) to the resolved value.

    Built once per block; all state is immutable, so one index may be shared
    between threads.
    """

    def __init__(self, height: Optional[int],
                 address_bindings: Mapping[Union[NamespaceId, Address], _Bindings],
                 mosaic_bindings: Mapping[EntityId, _Bindings]):
        self._height = height
        self._tables: Mapping[ResolutionType, Mapping] = MappingProxyType({
            ResolutionType.ADDRESS: MappingProxyType(dict(address_bindings)),
            ResolutionType.MOSAIC: MappingProxyType(dict(mosaic_bindings)),
        })

    @classmethod
    def build(cls, statements: Iterable[ResolutionStatement]) -> AliasResolutionIndex:
        """
        Index resolution statements of one block.

        Statements for the same alias are merged; their entries may arrive in
        any order.

        Raises:
            InvalidStatementError: If the statements span several heights or an
                alias has two entries for the same source
        """
        statements = list(statements)
        heights = {statement.height for statement in statements}
        if len(heights) > 1:
            raise InvalidStatementError(
                "Resolution statements span several block heights",
                details={"heights": sorted(heights)},
            )

        grouped: Dict[ResolutionType, Dict[object, List[ResolutionEntry]]] = {
            ResolutionType.ADDRESS: {},
            ResolutionType.MOSAIC: {},
        }
        for statement in statements:
            bucket = grouped[statement.resolution_type].setdefault(statement.unresolved, [])
            bucket.extend(statement.resolution_entries)

        address_bindings = {
            alias: _Bindings(entries, _alias_label(alias))
            for alias, entries in grouped[ResolutionType.ADDRESS].items()
        }
        mosaic_bindings = {
            alias: _Bindings(entries, _alias_label(alias))
            for alias, entries in grouped[ResolutionType.MOSAIC].items()
        }
        height = heights.pop() if heights else None
        logger.debug(
            f"Built resolution index at height {height}: "
            f"{len(address_bindings)} address aliases, {len(mosaic_bindings)} mosaic aliases"
        )
        return cls(height, address_bindings, mosaic_bindings)

    @property
    def height(self) -> Optional[int]:
        """Block height of the indexed statements, None for an empty index."""
        return self._height

    def aliases(self, resolution_type: ResolutionType) -> Tuple:
        return tuple(self._tables[resolution_type])

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())

    def _lookup(self, resolution_type: ResolutionType, alias, source: ReceiptSource) -> Resolved:
        bindings = self._tables[resolution_type].get(alias)
        label = _alias_label(alias)
        if bindings is None:
            raise UnresolvedAliasNotFoundError(
                f"No {resolution_type.name.lower()} resolution recorded for alias {label}",
                details={"alias": label, "height": self._height},
            )
        resolved = bindings.at(source)
        if resolved is None:
            raise NoApplicableBindingError(
                f"Alias {label} is not bound at or before source {source.key()}",
                details={"alias": label, "source": source.key(), "first_source": bindings.keys[0]},
            )
        return resolved

    def resolve(self, unresolved: Union[bytes, Address, EntityId], source: ReceiptSource,
                resolution_type: Optional[ResolutionType] = None) -> Resolved:
        """
        Resolve an alias as of a receipt source.

        Without `resolution_type`, 25 raw bytes (the wire form of an unresolved
        address) and Address values are treated as addresses. A NamespaceId is
        looked up in whichever table holds it, the mosaic table when both do;
        other 64-bit ids are mosaics. Concrete addresses and mosaic ids are
        returned unchanged.

        Raises:
            UnresolvedAliasNotFoundError: If the alias has no entries
            NoApplicableBindingError: If every entry comes after `source`
        """
        if resolution_type is None:
            if isinstance(unresolved, (bytes, bytearray, Address)):
                resolution_type = ResolutionType.ADDRESS
            elif (isinstance(unresolved, NamespaceId)
                  and unresolved in self._tables[ResolutionType.ADDRESS]
                  and unresolved not in self._tables[ResolutionType.MOSAIC]):
                resolution_type = ResolutionType.ADDRESS
            else:
                resolution_type = ResolutionType.MOSAIC

        if resolution_type == ResolutionType.ADDRESS:
            return self.resolve_address(unresolved, source)
        return self.resolve_mosaic_id(unresolved, source)

    def resolve_address(self, unresolved: Union[bytes, Address, NamespaceId], source: ReceiptSource) -> Address:
        """Resolve an unresolved address; a concrete Address passes through."""
        if isinstance(unresolved, (bytes, bytearray)):
            unresolved = unresolved_address_from_bytes(bytes(unresolved))
        if isinstance(unresolved, Address):
            return unresolved
        return self._lookup(ResolutionType.ADDRESS, NamespaceId(unresolved.id), source)

    def resolve_mosaic_id(self, unresolved: EntityId, source: ReceiptSource) -> MosaicId:
        """Resolve an unresolved mosaic id; a concrete MosaicId passes through."""
        if isinstance(unresolved, MosaicId):
            return unresolved
        return self._lookup(ResolutionType.MOSAIC, unresolved, source)


__all__ = ["AliasResolutionIndex"]
