"""Jinja2 template loader and rendering.

Provides a single render() function for all templates.
"""

from jinja2 import PackageLoader, select_autoescape
from jinja2.sandbox import SandboxedEnvironment


# Templates only receive data, never call into application code
_env = SandboxedEnvironment(
    loader=PackageLoader('reqdoc', 'templates'),
    autoescape=select_autoescape(['html']),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def render(template_name: str, **kwargs) -> str:
    """Render a Jinja2 template with the given variables.

    Args:
        template_name: Path to template file (e.g., 'requirements.md.j2')
        **kwargs: Variables to pass to the template

    Returns:
        Rendered template string
    """
    template = _env.get_template(template_name)
    return template.render(**kwargs)
