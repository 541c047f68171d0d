"""Generator that scaffolds Crocodoc configuration into an application."""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ..api.exceptions import GeneratorError
from ..config.schemas import DEFAULT_BASE_URL, DEFAULT_PARAM_NAME, DEFAULT_VIEW_URL

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates" / "install"

CONFIG_FILE = Path("config") / "crocodoc.yml"
INITIALIZER_FILE = Path("config") / "initializers" / "crocodoc.py"

# template name -> output path relative to the destination
FILES = [
    ("crocodoc.yml.j2", CONFIG_FILE),
    ("initializer.py.j2", INITIALIZER_FILE),
]


class InstallGenerator:
    """Copies the Crocodoc configuration file and initializer into a project.

    Files written, relative to the destination:
        config/crocodoc.yml               - YAML settings holding the API token
        config/initializers/crocodoc.py   - module exposing a configured client
    """

    def __init__(self, api_token: str, destination: Path | str = ".", force: bool = False):
        """Initialize the generator.

        Args:
            api_token: Crocodoc API token written into the configuration file
            destination: Root directory of the host application
            force: Overwrite files that already exist
        """
        if not api_token or not api_token.strip():
            raise GeneratorError("An API token is required to install Crocodoc")

        self.api_token = api_token.strip()
        self.destination = Path(destination)
        self.force = force
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def context(self) -> dict[str, object]:
        """Variables available to every template."""
        return {
            "api_token": self.api_token,
            "param_name": DEFAULT_PARAM_NAME,
            "base_url": DEFAULT_BASE_URL,
            "view_url": DEFAULT_VIEW_URL,
            "timeout": 60,
            "config_filename": CONFIG_FILE.name,
        }

    def run(self) -> list[Path]:
        """Write all files and return their paths.

        Nothing is written when any target already exists (unless force is
        set) or when any template fails to render.
        """
        self.check_conflicts()
        rendered = [(target, self.render(source)) for source, target in FILES]
        return [self.write(target, content) for target, content in rendered]

    def check_conflicts(self) -> None:
        """Raise GeneratorError if a target file exists and force is not set."""
        if self.force:
            return

        existing = [str(self.destination / target) for _, target in FILES
                    if (self.destination / target).exists()]
        if existing:
            raise GeneratorError(
                f"{', '.join(existing)} already exists, use force to overwrite",
                details={"paths": existing},
            )

    def render(self, source: str) -> str:
        """Render a template from the package template directory."""
        try:
            return self.env.get_template(source).render(**self.context())
        except TemplateError as e:
            raise GeneratorError(f"Failed to render template {source}: {e}") from e

    def write(self, target: Path, content: str) -> Path:
        """Write content to a path relative to the destination."""
        output_path = self.destination / target
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.info(f"Created {output_path}")
        return output_path


def install(api_token: str, destination: Path | str = ".", force: bool = False) -> list[Path]:
    """Scaffold the Crocodoc configuration files into an application.

    Args:
        api_token: Crocodoc API token
        destination: Root directory of the host application
        force: Overwrite files that already exist

    Returns:
        Paths of the written files
    """
    return InstallGenerator(api_token, destination, force).run()
