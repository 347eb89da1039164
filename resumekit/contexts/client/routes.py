"""Navigation targets returned by client screens."""

LANDING = "/"
AUTH = "/auth"
DASHBOARD = "/dashboard"
TEMPLATES = "/templates"


def editor_route(resume_id: str) -> str:
    return f"/builder/{resume_id}"


def preview_route(resume_id: str) -> str:
    return f"/preview/{resume_id}"
