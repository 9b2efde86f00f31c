from app.notifications.types import Notification


def daily_suggestion_ready(user_id: str, outfit_count: int, condition: str | None) -> Notification:
    body = f"{outfit_count} outfit idea{'s' if outfit_count != 1 else ''} picked for today"
    if condition:
        body += f" ({condition.lower()})"
    return Notification(
        user_id=user_id,
        title="Your outfits for today are ready",
        body=body,
        kind="daily_suggestion",
        data={"outfit_count": outfit_count},
    )
