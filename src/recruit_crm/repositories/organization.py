"""Organization and profile lookups."""

from typing import List, Optional

from sqlalchemy.orm import Session

from recruit_crm.auth.policies import scope_predicate
from recruit_crm.core.session_context import RequestContext
from recruit_crm.models.organization import Organization
from recruit_crm.models.profile import Profile


class OrganizationRepository:
    """Read-only access to the caller's organization and its members."""

    def get_current(self, db: Session, context: RequestContext) -> Optional[Organization]:
        return db.query(Organization).filter(scope_predicate(context, Organization)).first()

    def list_members(self, db: Session, context: RequestContext) -> List[Profile]:
        return (
            db.query(Profile)
            .filter(scope_predicate(context, Profile))
            .order_by(Profile.last_name, Profile.first_name)
            .all()
        )
