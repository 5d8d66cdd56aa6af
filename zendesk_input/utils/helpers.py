from datetime import datetime, timezone


def iso_to_epoch_second(value):
    """Convert an ISO-8601 timestamp to epoch seconds.

    Accepts a trailing ``Z`` and treats naive values as UTC. Raises
    ``ValueError`` for anything ``datetime.fromisoformat`` cannot read.
    """
    if isinstance(value, datetime):
        date_obj = value
    else:
        text = str(value).strip()
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        date_obj = datetime.fromisoformat(text)

    if date_obj.tzinfo is None:
        date_obj = date_obj.replace(tzinfo=timezone.utc)

    return int(date_obj.timestamp())


def split_list(value):
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(',') if v.strip()]
    return [str(v).strip() for v in value if str(v).strip()]
