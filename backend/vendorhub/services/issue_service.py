# Overview: Service-layer operations for vendor issues; encapsulates business logic and store work.

"""
Issue Service

Issues are quality or delivery problems logged against a vendor.

RULES:
- New issues always start out pending, whatever the client sends
- resolved_date is set iff status == resolved: setting status to resolved
  stamps today's date, setting it to anything else clears the date
- An update that does not touch status leaves status and resolved_date alone
"""

from ..schemas import ISSUE_STATUS_PENDING, ISSUE_STATUS_RESOLVED, IssueInput, IssueUpdate
from ..stores.base import RecordStore
from ..validation import NotFoundError
from vendorhub.time_utils import today


class IssueNotFoundError(NotFoundError):
    """Raised when an issue is not found."""
    pass


def create_issue(store: RecordStore, data: IssueInput) -> dict:
    fields = data.to_fields()
    stamp = today()
    fields["status"] = ISSUE_STATUS_PENDING
    fields["resolved_date"] = None
    fields["date_found"] = fields.get("date_found") or stamp
    fields["date_added"] = stamp
    return store.add_issue(fields)


def update_issue(store: RecordStore, issue_id: int, data: IssueUpdate) -> dict:
    """
    Merge the supplied fields onto an issue.

    Args:
        store: Active record store
        issue_id: Issue to update
        data: Fields present in the request

    Returns:
        Updated issue record

    Raises:
        IssueNotFoundError: If issue not found
    """
    if store.get_issue(issue_id) is None:
        raise IssueNotFoundError(f"Issue {issue_id} not found")

    changes = data.to_fields()
    if "status" in changes:
        changes["resolved_date"] = today() if changes["status"] == ISSUE_STATUS_RESOLVED else None

    issue = store.update_issue(issue_id, changes)
    if issue is None:
        raise IssueNotFoundError(f"Issue {issue_id} not found")
    return issue
