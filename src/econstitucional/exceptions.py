from typing import Optional


class CorpusLoadError(Exception):
  """The article corpus could not be produced or loaded at all"""


class ModelServiceError(Exception):
  """The hosted model returned a failure; status_code is None for transport errors"""

  def __init__(self, message: str, status_code: Optional[int] = None):
    super().__init__(message)
    self.status_code = status_code
