from dataclasses import dataclass

from flask import current_app

from .accounts import AccountService
from .acknowledgments import AcknowledgmentService
from .analytics import AnalyticsProjector
from .assignments import AssignmentService
from .groups import GroupMembershipService
from .store import EntityStore


@dataclass
class Services:
    store: EntityStore
    groups: GroupMembershipService
    acknowledgments: AcknowledgmentService
    assignments: AssignmentService
    analytics: AnalyticsProjector
    accounts: AccountService


def build_services(session, config) -> Services:
    """Wire the service objects once; routes reach them through ``get_services``."""
    store = EntityStore(session)
    groups = GroupMembershipService(store, session, max_size=config.get("MAX_GROUP_SIZE", 5))
    return Services(
        store=store,
        groups=groups,
        acknowledgments=AcknowledgmentService(store, groups, session),
        assignments=AssignmentService(store, session),
        analytics=AnalyticsProjector(store),
        accounts=AccountService(store, delay_seconds=config.get("LOGIN_DELAY_SECONDS", 0)),
    )


def get_services() -> Services:
    return current_app.extensions["coursedesk"]
