from .accounting import (
    check_in,
    check_out,
    delete_session,
    edit_active_session,
    edit_session,
    force_check_out,
    list_user_sessions,
    recalculate_user_hours,
)
from .analytics import get_dashboard, get_range_stats, resolve_date_range
from .auth import authenticate_staff, change_password, create_staff_account
from .auto_checkout import (
    get_auto_checkout_settings,
    run_auto_checkout,
    run_scheduled_auto_checkout,
    should_run,
    update_auto_checkout_settings,
)
from .donations import add_donation, list_user_donations
from .export import apply_export_filters, build_export
from .registry import list_active_volunteers
from .users import (
    create_user,
    delete_user,
    get_user,
    list_communication_opt_ins,
    list_users,
    register_volunteer,
    search_users,
    update_user,
)
from .waiver import (
    complete_waiver,
    complete_waiver_in_person,
    create_waiver_request,
    get_waiver_request,
    sign_waiver_request,
    waiver_state,
)

__all__ = [
    # accounting
    "check_in",
    "check_out",
    "delete_session",
    "edit_active_session",
    "edit_session",
    "force_check_out",
    "list_user_sessions",
    "recalculate_user_hours",
    # analytics
    "get_dashboard",
    "get_range_stats",
    "resolve_date_range",
    # auth
    "authenticate_staff",
    "change_password",
    "create_staff_account",
    # auto-checkout
    "get_auto_checkout_settings",
    "run_auto_checkout",
    "run_scheduled_auto_checkout",
    "should_run",
    "update_auto_checkout_settings",
    # donations
    "add_donation",
    "list_user_donations",
    # export
    "apply_export_filters",
    "build_export",
    # registry
    "list_active_volunteers",
    # users
    "create_user",
    "delete_user",
    "get_user",
    "list_communication_opt_ins",
    "list_users",
    "register_volunteer",
    "search_users",
    "update_user",
    # waiver
    "complete_waiver",
    "complete_waiver_in_person",
    "create_waiver_request",
    "get_waiver_request",
    "sign_waiver_request",
    "waiver_state",
]
