"""EmbedRenderer: Jinja2-based HTML for embedding forms in other sites.

Two artefacts are rendered from the ``templates/`` directory:

  - the embed *snippet* a site owner pastes into their page: an iframe
    pointing at ``/embed/{form_id}`` plus a ``message`` listener that
    forwards ``FORM_SUBMITTED`` events to ``window.onFormFlowSubmit``
  - the embed *page* served inside that iframe, carrying the form
    definition and the theme as explicit CSS variables.  The wizard UI
    itself is an external bundle; the page gives it
    ``window.formflowNotifySubmitted(formId, submissionId, data)``, which
    posts the ``FORM_SUBMITTED`` message to the embedding site
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from formflow_wizard.models.form import FormDefinition, Theme
from formflow_wizard.models.submission import FormSubmittedMessage
from formflow_wizard.theme import theme_style


def embed_url(base_url: str, form_id: str) -> str:
    """URL of the page that hosts ``form_id`` inside an iframe."""
    return f"{base_url.rstrip('/')}/embed/{form_id}"


def submitted_message(
    form_id: str, submission_id: str, answers: dict[str, Any]
) -> dict[str, Any]:
    """The ``postMessage`` payload announcing a successful submission."""
    message = FormSubmittedMessage(form_id=form_id, submission_id=submission_id, data=answers)
    return message.model_dump(by_alias=True)


class EmbedRenderer:
    """Renders embed snippets and embed pages.

    Args:
        base_url: public base URL of the FormFlow server
        template_dir: optional override for the template directory.
            Defaults to ``templates/`` sibling of this module.
    """

    def __init__(self, base_url: str, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"
        self._base_url = base_url.rstrip("/")
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def url(self, form_id: str) -> str:
        return embed_url(self._base_url, form_id)

    def render_snippet(
        self,
        form_id: str,
        *,
        height: str = "600px",
        width: str = "100%",
    ) -> str:
        """HTML to paste into a host page."""
        template = self._env.get_template("embed_snippet.jinja2")
        return template.render(
            form_id=form_id,
            src=self.url(form_id),
            height=height,
            width=width,
        )

    def render_page(
        self,
        definition: FormDefinition,
        *,
        theme: Theme | None = None,
    ) -> str:
        """The document served at ``/embed/{form_id}``.

        ``theme`` overrides the form's own theme when given.
        """
        active_theme = theme or definition.form.theme
        template = self._env.get_template("embed_page.jinja2")
        return template.render(
            form=definition.form,
            theme=active_theme,
            style=theme_style(active_theme),
            definition=definition.model_dump(mode="json"),
            submit_url=f"{self._base_url}/api/submit",
        )
