"""Prompt templates for response suggestions."""

from line_slack_relay.relay.models import CustomerProfile, OrderRecord

INSTRUCTIONS = """上記の情報を元に、以下の内容を含む対応案を作成してください:
1. 顧客の状況に合わせた適切な挨拶
2. メッセージの内容に対する具体的な回答や提案
3. 顧客の購入履歴や会員レベルに基づいたパーソナライズされた提案
4. 適切な締めの言葉

回答は日本語で、丁寧かつ簡潔に作成してください。"""


def build_system_prompt(custom_instructions: str | None = None) -> str:
    """Build the system prompt for the suggestion model.

    Args:
        custom_instructions: Optional additional instructions to append

    Returns:
        Complete system prompt string
    """
    base_prompt = (
        "あなたは顧客サポートの担当者です。"
        "顧客情報と注文履歴を元に、適切な対応を提案してください。"
    )

    if custom_instructions:
        return f"{base_prompt}\n\n{custom_instructions}"

    return base_prompt


def format_customer(profile: CustomerProfile) -> str:
    return "\n".join(
        [
            "顧客情報:",
            f"- 名前: {profile.name}",
            f"- ID: {profile.id}",
            f"- メールアドレス: {profile.email}",
            f"- 電話番号: {profile.phone}",
            f"- 住所: {profile.address}",
            f"- 会員レベル: {profile.membership_level}",
            f"- 登録日: {profile.registration_date.isoformat()}",
            f"- 最終購入日: {profile.last_purchase_date.isoformat()}",
        ]
    )


def format_order(index: int, order: OrderRecord) -> str:
    lines = [
        f"注文 {index}:",
        f"- 注文番号: {order.id}",
        f"- 注文日: {order.order_date.isoformat()}",
        f"- 状態: {order.status}",
        f"- 合計金額: ¥{order.total_amount:,}",
        "- 商品:",
    ]
    lines.extend(
        f"  • {item.name} x {item.quantity} (¥{item.price:,}/個)" for item in order.items
    )
    return "\n".join(lines)


def format_order_history(orders: list[OrderRecord]) -> str:
    if not orders:
        return "注文履歴: なし"
    rendered = "\n\n".join(format_order(i, order) for i, order in enumerate(orders, start=1))
    return f"注文履歴:\n{rendered}"


def build_suggestion_prompt(
    profile: CustomerProfile,
    orders: list[OrderRecord],
    message: str,
) -> str:
    """Build the user prompt asking for a reply draft.

    Every profile field, every order in the given order, the verbatim
    customer message, then the fixed instruction block.
    """
    sections = [
        format_customer(profile),
        format_order_history(orders),
        f'顧客からのメッセージ:\n"{message}"',
        INSTRUCTIONS,
    ]
    return "\n\n".join(sections)
