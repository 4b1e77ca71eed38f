"""Display formatting for elapsed seconds."""

SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


def format_clock(seconds: int) -> str:
    """Format seconds as HH:MM:SS; hours keep counting past 24."""
    seconds = max(0, int(seconds))
    hours = seconds // SECONDS_PER_HOUR
    minutes = (seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    secs = seconds % SECONDS_PER_MINUTE
    return f"{hours:02}:{minutes:02}:{secs:02}"


def format_duration_brief(seconds: int) -> str:
    """Format seconds as '2h 5m', or '5m' below one hour."""
    seconds = max(0, int(seconds))
    hours = seconds // SECONDS_PER_HOUR
    minutes = (seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
