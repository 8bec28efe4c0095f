from domain.athletes.compare import format_inr
from domain.athletes.derivations import initials


def format_inr_filter(value):
    """Format a rupee amount with Indian digit grouping."""
    return format_inr(value)


def format_percent(value):
    """Format a 0-100 value as a whole percentage."""
    if value is None:
        return "0%"
    return f"{int(value)}%"


def register_filters(app):
    """Register custom Jinja2 filters."""
    app.jinja_env.filters['inr'] = format_inr_filter
    app.jinja_env.filters['initials'] = initials
    app.jinja_env.filters['percent'] = format_percent
