"""
Generic entity repository used to look up and create locales and languages.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type

from sqlalchemy.orm import selectinload
from sqlmodel import Session, SQLModel, select

logger = logging.getLogger(__name__)


@dataclass
class Criteria:
    """
    Search criteria: primary keys, equality filters, associations to load
    and sortings. Builder methods return the criteria so calls chain.
    """
    ids: List[Any] = field(default_factory=list)
    filters: Dict[str, Any] = field(default_factory=dict)
    associations: List[str] = field(default_factory=list)
    sortings: List[Tuple[str, bool]] = field(default_factory=list)

    def add_filter(self, field_name: str, value: Any) -> "Criteria":
        self.filters[field_name] = value
        return self

    def add_association(self, name: str) -> "Criteria":
        self.associations.append(name)
        return self

    def add_sorting(self, field_name: str, descending: bool = False) -> "Criteria":
        self.sortings.append((field_name, descending))
        return self


class EntityRepository:
    """Search and create rows of one SQLModel table."""

    def __init__(self, session: Session, model: Type[SQLModel]):
        self.session = session
        self.model = model

    def _primary_key(self):
        return list(self.model.__table__.primary_key.columns)[0]

    def _statement(self, criteria: Criteria):
        statement = select(self.model)
        if criteria.ids:
            statement = statement.where(self._primary_key().in_(criteria.ids))
        for field_name, value in criteria.filters.items():
            statement = statement.where(getattr(self.model, field_name) == value)
        for name in criteria.associations:
            statement = statement.options(selectinload(getattr(self.model, name)))
        for field_name, descending in criteria.sortings:
            column = getattr(self.model, field_name)
            statement = statement.order_by(column.desc() if descending else column.asc())
        return statement

    def search(self, criteria: Criteria) -> List[SQLModel]:
        """Return all rows matching ``criteria``."""
        return list(self.session.exec(self._statement(criteria)).all())

    def first(self, criteria: Criteria) -> Optional[SQLModel]:
        """Return the first row matching ``criteria`` or None."""
        return self.session.exec(self._statement(criteria)).first()

    def search_ids(self, criteria: Criteria) -> List[Any]:
        """Return the primary keys of the rows matching ``criteria``."""
        key_name = self._primary_key().name
        return [getattr(entity, key_name) for entity in self.search(criteria)]

    def create(self, payloads: List[Dict[str, Any]]) -> List[Any]:
        """
        Insert one row per payload and commit.
        
        Returns:
            Primary keys of the created rows, in payload order
        """
        entities = [self.model(**payload) for payload in payloads]
        for entity in entities:
            self.session.add(entity)
        self.session.commit()
        key_name = self._primary_key().name
        ids = [getattr(entity, key_name) for entity in entities]
        logger.info(f"Created {len(ids)} {self.model.__tablename__} row(s)")
        return ids
