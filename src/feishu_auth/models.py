"""Base Pydantic model for feishu-auth.

All models in the package inherit from `AuthBaseModel` so that validation and
serialization behave the same everywhere:

- Strict field validation (no extra fields allowed)
- Immutable instances

Example:
    >>> from feishu_auth.models import AuthBaseModel
    >>>
    >>> class MyModel(AuthBaseModel):
    ...     name: str
    >>>
    >>> MyModel(name="test").model_dump()
    {'name': 'test'}
"""

from pydantic import BaseModel, ConfigDict


class AuthBaseModel(BaseModel):
    """Base model for all feishu-auth Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable

    Configuration models that must be updated in place (see
    `FeishuAuthConfigModel`) override `model_config`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
