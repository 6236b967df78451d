"""Local key-value draft store backed by SQLAlchemy."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from arblab.bankroll.ledger import BankrollState, bankroll_payload, normalize_bankroll, total_bankroll
from arblab.db.database import SessionLocal, get_session
from arblab.db.models import Draft
from arblab.drafts.schemas import (
    BankrollSizeSchema,
    ParlayDraftSchema,
    PickSizerDraftSchema,
    TwoLegDraftSchema,
)
from arblab.drafts.state import (
    ParlayDraft,
    PickSizerDraft,
    TwoLegDraft,
    new_parlay_draft,
    new_pick_sizer_draft,
    new_two_leg_draft,
)

logger = logging.getLogger(__name__)

SIMPLE_ARB_KEY = "simple-arb-draft-v1"
MULTI_STAKE_ARB_KEY = "multi-stake-arb-draft-v1"
PARLAY_ARB_KEY = "parlay-arb-draft-v4"
PICK_SIZER_KEY = "picksizer-draft-v1"
BOOKS_KEY = "sportsbook-names-v1"
BANKROLL_SIZE_KEY = "BankrollSize"

T = TypeVar("T")


class DraftStore:
    """Persist page drafts verbatim under page-specific keys."""

    def __init__(self, session_factory: sessionmaker | None = None) -> None:
        self.session_factory = session_factory or SessionLocal

    # ----- Opaque payloads -----------------------------------------------------

    def get(self, key: str) -> Any | None:
        with get_session(self.session_factory) as session:
            row = session.get(Draft, key)
            return row.payload if row else None

    def put(self, key: str, payload: Any) -> None:
        with get_session(self.session_factory) as session:
            row = session.get(Draft, key)
            if row is None:
                session.add(Draft(key=key, payload=payload))
            else:
                row.payload = payload
        logger.debug("Saved draft %s", key)

    def delete(self, key: str) -> bool:
        with get_session(self.session_factory) as session:
            row = session.get(Draft, key)
            if row is None:
                return False
            session.delete(row)
        logger.info("Deleted draft %s", key)
        return True

    def keys(self) -> list[str]:
        with get_session(self.session_factory) as session:
            return list(session.scalars(select(Draft.key).order_by(Draft.key)))

    # ----- Typed drafts --------------------------------------------------------

    def _load(self, key: str, schema: type[BaseModel], default: Callable[[], T]) -> T:
        payload = self.get(key)
        if payload is None:
            return default()
        try:
            return schema.model_validate(payload).to_domain()  # type: ignore[attr-defined]
        except ValidationError as exc:
            logger.warning("Discarding unreadable draft %s: %s", key, exc.errors()[:3])
            return default()

    def load_two_leg(self, key: str = SIMPLE_ARB_KEY) -> TwoLegDraft:
        return self._load(key, TwoLegDraftSchema, new_two_leg_draft)

    def save_two_leg(self, draft: TwoLegDraft, key: str = SIMPLE_ARB_KEY) -> None:
        self.put(key, TwoLegDraftSchema.from_domain(draft).model_dump(mode="json"))

    def load_parlay(self, key: str = PARLAY_ARB_KEY) -> ParlayDraft:
        return self._load(key, ParlayDraftSchema, new_parlay_draft)

    def save_parlay(self, draft: ParlayDraft, key: str = PARLAY_ARB_KEY) -> None:
        self.put(key, ParlayDraftSchema.from_domain(draft).model_dump(mode="json"))

    def load_pick_sizer(self) -> PickSizerDraft:
        """Saved rows, or one blank row when nothing (or an empty list) was saved."""

        draft = self._load(PICK_SIZER_KEY, PickSizerDraftSchema, new_pick_sizer_draft)
        return draft if draft.rows else new_pick_sizer_draft()

    def save_pick_sizer(self, draft: PickSizerDraft) -> None:
        self.put(PICK_SIZER_KEY, PickSizerDraftSchema.from_domain(draft).model_dump(mode="json"))

    # ----- Bankroll ------------------------------------------------------------

    def load_bankroll(self) -> BankrollState:
        return normalize_bankroll(self.get(BOOKS_KEY))

    def save_bankroll(self, state: BankrollState) -> None:
        """Save the ledger and keep the BankrollSize record in sync with its total."""

        self.put(BOOKS_KEY, bankroll_payload(state))
        self.save_bankroll_size(total_bankroll(state))

    def load_bankroll_size(self) -> float | None:
        """Bankroll used by the pick sizer, or None when unset or not positive."""

        payload = self.get(BANKROLL_SIZE_KEY)
        if payload is None:
            return None
        try:
            return BankrollSizeSchema.model_validate(payload).bankroll
        except ValidationError:
            return None

    def save_bankroll_size(self, bankroll: float) -> None:
        self.put(
            BANKROLL_SIZE_KEY,
            {"bankroll": bankroll, "updated_at": datetime.now(timezone.utc).isoformat()},
        )
