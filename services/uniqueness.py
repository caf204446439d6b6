import logging

from sqlalchemy import inspect, or_
from sqlalchemy.exc import IntegrityError

from extensions import db
from services.errors import DuplicateKey

logger = logging.getLogger(__name__)


class UniqueGuard:
    """Natural-key check before a write; the unique constraints stay authoritative."""

    def __init__(self, model, label, exclude_id=None, **fields):
        self.model = model
        self.label = label
        self.exclude_id = exclude_id
        self.fields = {k: v for k, v in fields.items() if v is not None}

    def find_conflict(self):
        if not self.fields:
            return None
        query = self.model.query.filter(
            or_(*[getattr(self.model, k) == v for k, v in self.fields.items()])
        )
        if self.exclude_id is not None:
            pk = inspect(self.model).primary_key[0]
            query = query.filter(pk != self.exclude_id)
        return query.first()

    def conflicting_fields(self, conflict):
        matched = [k for k, v in self.fields.items() if getattr(conflict, k) == v]
        # The store may compare case-insensitively where Python does not
        return matched or list(self.fields)

    def duplicate(self, conflict):
        fields = self.conflicting_fields(conflict)
        logger.warning("Duplicate %s rejected on %s", self.label, ", ".join(fields))
        return DuplicateKey(self.label, fields)

    def check(self):
        conflict = self.find_conflict()
        if conflict is not None:
            raise self.duplicate(conflict)

    def commit(self, *others):
        """Commit the session; guards in ``others`` cover records written alongside."""
        try:
            db.session.commit()
        except IntegrityError as err:
            db.session.rollback()
            for guard in (self,) + others:
                conflict = guard.find_conflict()
                if conflict is not None:
                    raise guard.duplicate(conflict) from err
            raise
