"""htmx exercise endpoints.

Every route returns an HTML fragment meant to be swapped into the page that
made the request; none of them return a full document.
"""
