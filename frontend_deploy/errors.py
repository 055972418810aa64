"""Errors raised while assembling a site topology and exporting its outputs."""


class FrontendDeployError(Exception):
  """Base class for all frontend-deploy errors."""


class ConfigurationError(FrontendDeployError):
  """Invalid or missing site configuration.

  Raised before anything is handed to the provisioning engine.
  """

  def __init__(self, field: str, message: str) -> None:
    super().__init__(f"{field}: {message}")
    self.field = field


class TopologyReferenceError(FrontendDeployError):
  """An assembled topology is internally inconsistent."""

  def __init__(self, entity: str, message: str) -> None:
    super().__init__(f"{entity}: {message}")
    self.entity = entity


class OutputCollisionError(TopologyReferenceError):
  """Two outputs of one deployment share a name."""

  def __init__(self, name: str) -> None:
    super().__init__(name, "output name is already taken")
    self.name = name


class MissingResolvedValueError(FrontendDeployError):
  """The provisioning engine returned no value for a required entity."""

  def __init__(self, entity: str) -> None:
    super().__init__(f"{entity}: no resolved value")
    self.entity = entity
