from pydantic import BaseModel, ConfigDict, Field, model_validator

UNTITLED_SITE = "Untitled Site"


class SiteResource(BaseModel):
    """One file inside a site bundle."""

    model_config = ConfigDict(frozen=True)

    path: str
    content_type: str
    size_bytes: int | None = None


class SiteDescriptor(BaseModel):
    """Result of structural analysis of a blob believed to be a website.

    A descriptor is either a renderable site (``has_index_page``) or a grouped
    file collection without an index page (``is_file_directory``), never both.
    """

    model_config = ConfigDict(frozen=True)

    has_index_page: bool
    resources: tuple[SiteResource, ...] = ()
    custom_headers: dict[str, str] | None = Field(
        None,
        description="Header name -> value parsed from the reserved _headers entry",
    )
    is_file_directory: bool = False
    title: str = UNTITLED_SITE

    @model_validator(mode="after")
    def validate_shape(self) -> "SiteDescriptor":
        """Enforce index/file-directory exclusivity and non-empty directories."""
        if self.is_file_directory and self.has_index_page:
            msg = "A site cannot be both a file directory and have an index page"
            raise ValueError(msg)
        if self.is_file_directory and not self.resources:
            msg = "A file directory must list at least one resource"
            raise ValueError(msg)
        return self


class SiteStructure(BaseModel):
    """Auxiliary structural metadata reported alongside a SiteDescriptor."""

    model_config = ConfigDict(frozen=True)

    has_index_page: bool
    has_headers: bool
    resource_count: int
    directories: tuple[str, ...] = ()
