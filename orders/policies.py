"""Authorization predicates for orders and disputes.

Pure functions of (actor, object) with no database access beyond attributes
already loaded on the arguments. Services raise `ForbiddenError` when they
return False; the DRF permission classes in `orders.api.permissions` wrap the
same checks at the HTTP boundary.
"""


def _profile_type(user) -> str:
    profile = getattr(user, "profile", None) if user else None
    return getattr(profile, "type", "") if profile else ""


def is_admin(user) -> bool:
    return bool(user and user.is_authenticated and user.is_staff)


def is_client_user(user) -> bool:
    return _profile_type(user) == "client"


def is_executor_user(user) -> bool:
    return _profile_type(user) == "executor"


def is_order_client(user, order) -> bool:
    return user is not None and order.client_id == user.id


def is_order_executor(user, order) -> bool:
    return user is not None and order.executor_id is not None and order.executor_id == user.id


def is_order_party(user, order) -> bool:
    return is_order_client(user, order) or is_order_executor(user, order)


# ---- lifecycle ----

def can_select_executor(user, order) -> bool:
    return is_order_client(user, order)


def can_submit_for_review(user, order) -> bool:
    return is_order_executor(user, order)


def can_approve_work(user, order) -> bool:
    return is_order_client(user, order)


def can_request_revision(user, order) -> bool:
    return is_order_client(user, order)


def can_cancel_order(user, order) -> bool:
    return is_order_client(user, order)


def can_edit_order(user, order) -> bool:
    return is_order_client(user, order)


def can_open_dispute(user, order) -> bool:
    return is_order_party(user, order)


def can_view_full_order(user, order) -> bool:
    return is_admin(user) or is_order_party(user, order)


# ---- responses ----

def can_respond_to_order(user, order) -> bool:
    return is_executor_user(user) and not is_order_client(user, order)


def can_manage_response(user, response) -> bool:
    return user is not None and response.executor_id == user.id


def can_list_order_responses(user, order) -> bool:
    return is_order_client(user, order)


# ---- disputes ----

def is_dispute_party(user, dispute) -> bool:
    return is_order_party(user, dispute.order)


def can_view_dispute(user, dispute) -> bool:
    return is_admin(user) or is_dispute_party(user, dispute)


def can_add_evidence(user, dispute) -> bool:
    return can_view_dispute(user, dispute)


def can_arbitrate(user) -> bool:
    return is_admin(user)
