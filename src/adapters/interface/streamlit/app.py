"""Streamlit payment form entry point."""

from decimal import Decimal

import streamlit as st

from src.application.use_cases.debt_allocator import DebtAllocator
from src.application.use_cases.transaction_payment import (
    TransactionPaymentSession,
)
from src.domain.constants import TRANSACTION_MODES
from src.domain.models import (
    PaymentSummary,
    TransactionPaymentPreview,
    TransactionRecord,
)
from src.domain.services import validation
from src.domain.services.transaction_payment import (
    preview_transaction_payment,
)
from src.infrastructure.container import build_transaction_payment_session
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import PaymentSettings

SESSION_KEY = "payment_session"
PARTNER_KEY = "payment_partner_id"
ALLOCATOR_KEY = "payment_debt_allocator"

ISSUE_MESSAGES = {
    validation.NON_POSITIVE_AMOUNT: "Amount must be greater than zero.",
    validation.NON_FINITE_AMOUNT: "Amount is not a number.",
    validation.NON_POSITIVE_RATE: "Exchange rate must be greater than zero.",
    validation.LOCAL_RATE_NOT_ONE: "Local currency must use rate 1.",
    validation.FOREIGN_RATE_IS_ONE: "Foreign currency needs an exchange rate.",
    validation.ACCOUNT_CREDIT_EXCEEDS_ADVANCE: (
        "Account credit exceeds the available advance."
    ),
    validation.ACCOUNT_CREDIT_NOT_LOCAL: (
        "Account credit must be in local currency."
    ),
}


def _build_session(mode: str, total_due: Decimal) -> TransactionPaymentSession:
    """Create a payment session wired to the configured database."""
    return build_transaction_payment_session(mode, total_due)


def _get_session(mode: str, total_due: Decimal) -> TransactionPaymentSession:
    """Return the session kept in ``st.session_state`` for this form.

    A new session is started when the transaction mode changes; a changed
    total due is pushed into the existing session.
    """
    session = st.session_state.get(SESSION_KEY)
    if session is None or session.rows.mode != mode:
        session = _build_session(mode, total_due)
        st.session_state[SESSION_KEY] = session
        st.session_state[PARTNER_KEY] = None
        st.session_state.pop(ALLOCATOR_KEY, None)
    elif session.rows.total_due != total_due:
        session.rows.set_total_due(total_due)
    return session


def _sync_partner(
    session: TransactionPaymentSession,
    partner_id: int | None,
) -> None:
    """Select the partner when the sidebar value changed."""
    if st.session_state.get(PARTNER_KEY) == partner_id:
        return
    session.select_partner(partner_id)
    st.session_state[PARTNER_KEY] = partner_id
    st.session_state.pop(ALLOCATOR_KEY, None)
    get_usage_logger().info(f"Payment form partner set to {partner_id}")


def _format_amount(value: Decimal, currency_code: str) -> str:
    """Format amounts for display."""
    return f"{value:,.2f} {currency_code}"


def _summary_rows(
    summary: PaymentSummary,
    currency_code: str,
) -> list[dict[str, str]]:
    """Return the label/value pairs shown under the payment rows."""
    rows = [
        ("Total paid", summary.total_paid),
        ("Overpaid", summary.overpaid),
        ("Underpaid", summary.underpaid),
        ("Debt paid", summary.debt_paid),
        ("Advance kept", summary.effective_overpaid),
        ("Balance after", summary.balance_after),
    ]
    return [
        {"Item": label, "Amount": _format_amount(value, currency_code)}
        for label, value in rows
    ]


def _issue_messages(issues: tuple[str, ...]) -> list[str]:
    """Translate row issue codes into user-facing messages."""
    return [ISSUE_MESSAGES.get(issue, issue) for issue in issues]


def _blocking_messages(summary: PaymentSummary) -> list[str]:
    """Return the reasons preventing the save action."""
    messages = []
    if summary.must_use_account_credit:
        messages.append("Use the partner's advance before leaving a debt.")
    if summary.must_allocate_debt:
        messages.append("Allocate the overpayment to open debts first.")
    return messages


def _preview_rows(
    preview: TransactionPaymentPreview,
    currency_code: str,
) -> list[dict[str, str]]:
    """Return the label/value pairs of an existing-transaction payment."""
    rows = [
        ("Total due", preview.total_due),
        ("Paid previously", preview.paid_previously),
        ("To be paid", preview.paid_local),
        ("Leftover", preview.leftover),
    ]
    if preview.has_advance:
        rows.append(("Advance payment", preview.advance))
    return [
        {"Item": label, "Amount": _format_amount(value, currency_code)}
        for label, value in rows
    ]


def _render_payment_rows(
    session: TransactionPaymentSession,
    settings: PaymentSettings,
) -> None:
    """Render one editable line per payment row."""
    rows = session.rows
    for row in rows.payments:
        methods = rows.available_payment_methods()
        if row.method not in methods:
            methods = methods + (row.method,)
        amount_col, currency_col, rate_col, method_col, remove_col = (
            st.columns([3, 2, 2, 3, 1])
        )
        amount = amount_col.number_input(
            "Amount",
            min_value=0.0,
            value=float(row.amount),
            key=f"amount_{row.id}",
        )
        currency = currency_col.selectbox(
            "Currency",
            settings.currencies,
            index=settings.currencies.index(row.currency)
            if row.currency in settings.currencies
            else 0,
            key=f"currency_{row.id}",
        )
        rate = rate_col.number_input(
            "Rate",
            min_value=0.0,
            value=float(row.exchange_rate),
            key=f"rate_{row.id}",
        )
        method = method_col.selectbox(
            "Method",
            methods,
            index=methods.index(row.method),
            key=f"method_{row.id}",
        )
        patch = {}
        if Decimal(str(amount)) != row.amount:
            patch["amount"] = amount
        if currency != row.currency:
            patch["currency"] = currency
        if Decimal(str(rate)) != row.exchange_rate:
            patch["exchange_rate"] = rate
        if method != row.method:
            patch["method"] = method
        if patch:
            rows.update_payment(row.id, **patch)
        if remove_col.button("✕", key=f"remove_{row.id}"):
            rows.remove_payment(row.id)
        for message in _issue_messages(rows.row_issues(row.id)):
            st.caption(message)

    if st.button("Add payment"):
        rows.add_payment()


def _get_allocator(session: TransactionPaymentSession) -> DebtAllocator:
    """Return the allocation session kept across reruns.

    The allocator is rebuilt while open transactions are loading and
    whenever the pool it distributes no longer matches the payment rows.
    """
    allocator = st.session_state.get(ALLOCATOR_KEY)
    if (
        allocator is None
        or allocator.is_loading
        or allocator.available_amount != session.rows.debt_allocation_pool
    ):
        allocator = session.open_debt_allocator()
        st.session_state[ALLOCATOR_KEY] = allocator
    return allocator


def _render_debt_row(allocator: DebtAllocator, index: int) -> None:
    """Render the allocation inputs of one open transaction."""
    row = allocator.rows[index]
    label_col, allocate_col, full_col = st.columns([4, 3, 2])
    label_col.write(
        f"{row.date.isoformat()} #{row.transaction_id}: "
        f"{row.leftover:,.2f} left"
    )
    # Keys carry the current value so widgets follow programmatic updates.
    allocate = allocate_col.number_input(
        "Allocate",
        min_value=0.0,
        value=float(row.allocate),
        key=f"allocate_{row.transaction_id}_{row.allocate}",
    )
    if Decimal(str(allocate)) != row.allocate:
        allocator.change_allocate(index, allocate)
        row = allocator.rows[index]
    pay_fully = full_col.checkbox(
        "Pay fully",
        value=row.pay_fully,
        disabled=not row.pay_fully and not allocator.can_pay_fully(index),
        key=f"pay_fully_{row.transaction_id}_{row.pay_fully}",
    )
    if pay_fully != row.pay_fully:
        allocator.toggle_pay_fully(index)


def _render_debt_allocation(session: TransactionPaymentSession) -> None:
    """Let the user spread the overpayment over open debts."""
    rows = session.rows
    summary = rows.summary()
    if not rows.open_debt_exists or summary.overpaid + summary.debt_paid == 0:
        return
    allocator = _get_allocator(session)
    if allocator.is_loading:
        st.info("Loading open transactions...")
        return
    for index in range(len(allocator.rows)):
        _render_debt_row(allocator, index)

    allocation = allocator.summary()
    st.caption(
        f"Allocated {allocation.total_covered:,.2f} of "
        f"{allocator.available_amount:,.2f}"
    )
    auto_col, reset_col, apply_col = st.columns(3)
    if auto_col.button("Auto-allocate oldest"):
        allocator.auto_allocate_oldest()
    if reset_col.button("Reset allocations"):
        allocator.reset()
        rows.set_debt_allocations(())
    if apply_col.button("Apply allocation", disabled=not allocator.can_save):
        if session.apply_debt_allocator(allocator):
            get_usage_logger().info(
                f"Debt allocation applied to {len(rows.debt_allocations)} "
                "transactions"
            )


def _render_new_transaction_page(settings: PaymentSettings) -> None:
    """Render the payment step of a new sale or supply."""
    mode = st.sidebar.selectbox("Mode", TRANSACTION_MODES)
    total_due = Decimal(
        str(st.sidebar.number_input("Total due", min_value=0.0, value=0.0))
    )
    raw_partner = st.sidebar.number_input("Partner id", min_value=0, value=0)
    partner_id = int(raw_partner) or None

    session = _get_session(mode, total_due)
    _sync_partner(session, partner_id)

    refund_change = st.sidebar.checkbox(
        "Refund change",
        value=session.rows.refund_change,
    )
    if refund_change != session.rows.refund_change:
        session.rows.set_refund_change(refund_change)

    _render_payment_rows(session, settings)
    _render_debt_allocation(session)

    summary = session.rows.summary()
    st.dataframe(
        _summary_rows(summary, settings.local_currency),
        use_container_width=True,
        hide_index=True,
    )
    for message in _blocking_messages(summary):
        st.warning(message)

    notes = st.text_area("Notes", value="")
    if st.button("Save payment", disabled=not session.rows.can_save):
        request = session.build_request(notes=notes)
        get_usage_logger().info(
            f"Payment saved for partner {request.partner_id} "
            f"({len(request.payments)} rows, "
            f"{len(request.debt_payments)} debt payments)"
        )
        st.success("Payment ready to be saved.")


def _render_pay_transaction_page(settings: PaymentSettings) -> None:
    """Render the payment of an already registered transaction."""
    total_due = st.sidebar.number_input("Total due", min_value=0.0, value=0.0)
    total_paid = st.sidebar.number_input("Paid", min_value=0.0, value=0.0)
    record = TransactionRecord(
        id=0,
        total_due=Decimal(str(total_due)),
        total_paid=Decimal(str(total_paid)),
    )
    amount = st.number_input("Amount", min_value=0.0, value=0.0)
    currency = st.selectbox("Currency", settings.currencies)
    rate = st.number_input("Rate", min_value=0.0, value=1.0)

    preview = preview_transaction_payment(
        record,
        amount=Decimal(str(amount)),
        currency=currency,
        exchange_rate=Decimal(str(rate)),
        local_currency=settings.local_currency,
    )
    st.dataframe(
        _preview_rows(preview, settings.local_currency),
        use_container_width=True,
        hide_index=True,
    )
    st.button("Save payment", disabled=not preview.is_valid)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Transaction Payments", layout="wide")
    st.title("Transaction Payments")
    settings = PaymentSettings.from_env()

    page = st.sidebar.selectbox("Page", ["New transaction", "Pay transaction"])
    if page == "New transaction":
        _render_new_transaction_page(settings)
    else:
        _render_pay_transaction_page(settings)


if __name__ == "__main__":  # pragma: no cover
    main()
