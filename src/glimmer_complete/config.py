import os

from pydantic import BaseModel


class Settings(BaseModel):
    translations_dir: str = "translations"
    placeholder: str = "GlimmerCompletionDummy"
    project_marker: str = "package.json"


def get_settings() -> Settings:
    return Settings(
        translations_dir=os.getenv("GLIMMER_COMPLETE_TRANSLATIONS_DIR", "translations"),
        placeholder=os.getenv("GLIMMER_COMPLETE_PLACEHOLDER", "GlimmerCompletionDummy"),
        project_marker=os.getenv("GLIMMER_COMPLETE_PROJECT_MARKER", "package.json"),
    )
