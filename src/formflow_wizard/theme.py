"""Theme → CSS custom properties.

The theme is threaded explicitly into whatever renders the form (the embed
page template); nothing here touches process-wide state.
"""

from formflow_wizard.models.form import Theme

# Theme attribute -> CSS custom property consumed by the stylesheet
_CSS_VARIABLES: dict[str, str] = {
    "primary_color": "--primary-color",
    "secondary_color": "--secondary-color",
    "background_color": "--background-color",
    "text_color": "--text-color",
    "font_family": "--font-family",
}


def theme_css_variables(theme: Theme) -> dict[str, str]:
    """Map a theme onto its CSS custom properties."""
    return {css: getattr(theme, attr) for attr, css in _CSS_VARIABLES.items()}


def theme_style(theme: Theme) -> str:
    """Inline ``style`` attribute value declaring the theme's variables."""
    return "; ".join(f"{name}: {value}" for name, value in theme_css_variables(theme).items())
