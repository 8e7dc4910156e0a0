"""Slack Block Kit payloads for staff notifications and reply dialogs."""

from line_slack_relay.relay.models import CorrelationToken, CustomerProfile, OrderRecord

HEADER_TEXT = "🔔 新しいLINEメッセージが届きました"
NO_RECENT_ORDERS = "最近の注文はありません"
HANDLE_CUSTOMER_ACTION_ID = "handle_customer"
RECENT_ORDER_LIMIT = 3

# Slack caps section text at 3000 characters; LINE caps a text message at 5000
SECTION_TEXT_LIMIT = 3000
REPLY_MAX_LENGTH = 5000

REPLY_MODAL_CALLBACK_ID = "reply_modal"
REPLY_BLOCK_ID = "reply_block"
REPLY_ACTION_ID = "reply_action"


def select_recent_orders(
    orders: list[OrderRecord], limit: int = RECENT_ORDER_LIMIT
) -> list[OrderRecord]:
    """Newest orders first by order date; ties keep their original order."""
    return sorted(orders, key=lambda order: order.order_date, reverse=True)[:limit]


def format_recent_orders(orders: list[OrderRecord]) -> str:
    recent = select_recent_orders(orders)
    if not recent:
        return NO_RECENT_ORDERS
    return "\n".join(
        f"• 注文番号: {order.id} | 日付: {order.order_date.isoformat()} | "
        f"状態: {order.status} | 金額: ¥{order.total_amount:,}"
        for order in recent
    )


def _field(label: str, value: str) -> dict:
    return {"type": "mrkdwn", "text": f"*{label}:*\n{value}"}


def _text_sections(label: str, value: str, limit: int = SECTION_TEXT_LIMIT) -> list[dict]:
    """Labelled section blocks holding the full value, split at the text limit."""
    text = _field(label, value)["text"]
    return [
        {"type": "section", "text": {"type": "mrkdwn", "text": text[start : start + limit]}}
        for start in range(0, len(text), limit)
    ]


def build_notification_blocks(
    profile: CustomerProfile,
    orders: list[OrderRecord],
    message: str,
    suggestion: str,
    token: CorrelationToken,
) -> list[dict]:
    """Compose the staff notification.

    The "handle_customer" button carries the serialized correlation token so
    the later staff action can be routed back to the LINE conversation.
    """
    divider = {"type": "divider"}
    return [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": HEADER_TEXT, "emoji": True},
        },
        {
            "type": "section",
            "fields": [
                _field("顧客名", profile.name),
                _field("会員レベル", profile.membership_level),
            ],
        },
        {
            "type": "section",
            "fields": [
                _field("顧客ID", profile.id),
                _field("最終購入日", profile.last_purchase_date.isoformat()),
            ],
        },
        *_text_sections("メッセージ", message),
        divider,
        *_text_sections("最近の注文", format_recent_orders(orders)),
        divider,
        *_text_sections("AI提案", suggestion),
        divider,
        {
            "type": "actions",
            "elements": [
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": "対応する", "emoji": True},
                    "value": token.serialize(),
                    "action_id": HANDLE_CUSTOMER_ACTION_ID,
                }
            ],
        },
    ]


def build_fallback_text(profile: CustomerProfile, message: str) -> str:
    """Plain-text summary shown in push notifications."""
    return f"{HEADER_TEXT}\n{profile.name}: {message}"


def build_reply_modal(token: CorrelationToken) -> dict:
    """Modal collecting the staff reply; the token rides in private_metadata."""
    return {
        "type": "modal",
        "callback_id": REPLY_MODAL_CALLBACK_ID,
        "private_metadata": token.serialize(),
        "title": {"type": "plain_text", "text": "Reply to Customer"},
        "submit": {"type": "plain_text", "text": "Send"},
        "close": {"type": "plain_text", "text": "Cancel"},
        "blocks": [
            {
                "type": "input",
                "block_id": REPLY_BLOCK_ID,
                "label": {"type": "plain_text", "text": "Your reply"},
                "element": {
                    "type": "plain_text_input",
                    "action_id": REPLY_ACTION_ID,
                    "multiline": True,
                    "max_length": REPLY_MAX_LENGTH,
                },
            }
        ],
    }
