"""
SQLAlchemy-backed store.

Implements the same row contract as the hosted store, including its two remote
procedures, and publishes a change event for every row a commit touched.
"""
import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime, case, update as sql_update
from sqlalchemy.exc import SQLAlchemyError

from roomadmin.models.promo_code import PromoCode
from roomadmin.models.room import Room, utcnow
from roomadmin.models.status_message import StatusMessage
from roomadmin.models.user_session import UserSession
from roomadmin.models.withdrawal import InfluencerBalance, InfluencerWithdrawal
from roomadmin.store.base import MISSING_PROCEDURE, Row, Store, StoreError
from roomadmin.store.feed import DELETE, INSERT, UPDATE, ChangeEvent, ChangeFeed

logger = logging.getLogger(__name__)

TABLES = {
    "rooms": Room,
    "user_sessions": UserSession,
    "promo_codes": PromoCode,
    "influencer_withdrawals": InfluencerWithdrawal,
    "influencer_balances": InfluencerBalance,
    "status_message": StatusMessage,
}


def to_row(obj) -> Row:
    row = {}
    for column in obj.__table__.columns:
        value = getattr(obj, column.name)
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        row[column.name] = value
    return row


class SqlStore(Store):
    def __init__(self, session_factory, feed: Optional[ChangeFeed] = None):
        self.session_factory = session_factory
        self.feed = feed or ChangeFeed()
        self.procedures = {
            "process_withdrawal_payment": self._process_withdrawal_payment,
            "adjust_room_occupancy": self._adjust_room_occupancy,
        }

    @contextmanager
    def _session(self):
        db = self.session_factory()
        try:
            yield db
        except StoreError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            detail = getattr(e, "orig", None) or e
            raise StoreError(str(detail)) from e
        finally:
            db.close()

    def _publish(self, events: List[ChangeEvent]):
        for event in events:
            self.feed.publish(event)

    def _model(self, table: str):
        model = TABLES.get(table)
        if model is None:
            raise StoreError(f'relation "{table}" does not exist', code="42P01")
        return model

    def _query(self, db, table: str, filters: Optional[Dict[str, Any]]):
        model = self._model(table)
        query = db.query(model)
        for column, value in (filters or {}).items():
            if column not in model.__table__.columns:
                raise StoreError(f"column {table}.{column} does not exist", code="42703")
            query = query.filter(getattr(model, column) == value)
        return query

    def _coerce(self, table: str, values: Row) -> Row:
        columns = self._model(table).__table__.columns
        coerced = {}
        for key, value in values.items():
            column = columns.get(key)
            if column is None:
                raise StoreError(
                    f"Could not find the '{key}' column of '{table}'", code="PGRST204"
                )
            if isinstance(column.type, DateTime) and isinstance(value, str):
                try:
                    value = datetime.fromisoformat(value.replace("Z", "+00:00"))
                except ValueError as e:
                    raise StoreError(f"invalid timestamp for {key}: {value}", code="22007") from e
            coerced[key] = value
        return coerced

    def select(self, table, filters=None, order_by=None, descending=False, limit=None):
        with self._session() as db:
            query = self._query(db, table, filters)
            if order_by:
                model = self._model(table)
                if order_by not in model.__table__.columns:
                    raise StoreError(f"column {table}.{order_by} does not exist", code="42703")
                column = getattr(model, order_by)
                query = query.order_by(column.desc() if descending else column.asc())
            if limit is not None:
                query = query.limit(limit)
            return [to_row(obj) for obj in query.all()]

    def insert(self, table, row):
        model = self._model(table)
        with self._session() as db:
            obj = model(**self._coerce(table, row))
            db.add(obj)
            db.commit()
            db.refresh(obj)
            new = to_row(obj)
        logger.debug(f"Inserted into {table}: {new.get('id')}")
        self._publish([ChangeEvent(table, INSERT, new=new)])
        return [new]

    def update(self, table, values, filters):
        values = self._coerce(table, values)
        with self._session() as db:
            objs = self._query(db, table, filters).all()
            olds = [to_row(obj) for obj in objs]
            for obj in objs:
                for key, value in values.items():
                    setattr(obj, key, value)
            db.commit()
            news = [to_row(obj) for obj in objs]
        self._publish([ChangeEvent(table, UPDATE, new=new, old=old) for old, new in zip(olds, news)])
        return news

    def delete(self, table, filters):
        with self._session() as db:
            objs = self._query(db, table, filters).all()
            olds = [to_row(obj) for obj in objs]
            for obj in objs:
                db.delete(obj)
            db.commit()
        logger.debug(f"Deleted {len(olds)} row(s) from {table}")
        self._publish([ChangeEvent(table, DELETE, old=old) for old in olds])

    def rpc(self, name, params):
        procedure = self.procedures.get(name)
        if procedure is None:
            raise StoreError(f"Could not find the function public.{name}", code=MISSING_PROCEDURE)
        try:
            result, events = procedure(**params)
        except TypeError as e:
            raise StoreError(f"Invalid arguments for {name}: {e}", code=MISSING_PROCEDURE) from e
        self._publish(events)
        return result

    def _process_withdrawal_payment(self, withdrawal_id, admin_notes=None):
        """Mark a withdrawal paid and add its amount to the influencer's paid total."""
        with self._session() as db:
            withdrawal = db.get(InfluencerWithdrawal, withdrawal_id)
            if withdrawal is None:
                raise StoreError(f"Withdrawal {withdrawal_id} not found", code="P0002")
            if withdrawal.status not in ("pending", "approved"):
                raise StoreError(
                    f"Withdrawal {withdrawal_id} is already {withdrawal.status}", code="P0001"
                )
            old_withdrawal = to_row(withdrawal)
            amount = withdrawal.amount_withdrawn
            if amount is None:
                amount = withdrawal.amount or 0

            now = utcnow()
            withdrawal.status = "paid"
            withdrawal.paid_at = now
            if admin_notes:
                withdrawal.notes = admin_notes

            balance = (
                db.query(InfluencerBalance)
                .filter(InfluencerBalance.influencer_id == withdrawal.influencer_id)
                .first()
            )
            old_balance = None
            if balance is None:
                balance = InfluencerBalance(
                    influencer_id=withdrawal.influencer_id, total_earned=0, total_paid=0
                )
                db.add(balance)
            else:
                old_balance = to_row(balance)
            balance.total_paid = (balance.total_paid or 0) + amount
            balance.last_updated = now
            db.commit()
            new_withdrawal = to_row(withdrawal)
            new_balance = to_row(balance)

        events = [
            ChangeEvent("influencer_withdrawals", UPDATE, new=new_withdrawal, old=old_withdrawal),
            ChangeEvent(
                "influencer_balances",
                UPDATE if old_balance else INSERT,
                new=new_balance,
                old=old_balance or {},
            ),
        ]
        return new_withdrawal, events

    def _adjust_room_occupancy(self, room_id, delta):
        """Add delta to a room's current_users in one statement, clamped at zero."""
        with self._session() as db:
            room = db.get(Room, room_id)
            if room is None:
                raise StoreError(f"Room {room_id} not found", code="P0002")
            old = to_row(room)
            adjusted = Room.current_users + int(delta)
            db.execute(
                sql_update(Room)
                .where(Room.id == room_id)
                .values(current_users=case((adjusted < 0, 0), else_=adjusted))
            )
            db.commit()
            db.refresh(room)
            new = to_row(room)
        return new["current_users"], [ChangeEvent("rooms", UPDATE, new=new, old=old)]
