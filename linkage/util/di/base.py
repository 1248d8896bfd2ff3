"""Provider base and the names of swappable components."""

from typing import ClassVar, Literal, get_args

from dishka import Provider

# Components that have both a production and a mock provider
Component = Literal["directory"]
COMPONENTS: frozenset[Component] = frozenset(get_args(Component))


class ProviderBase(Provider):
    """Base for all linkage providers.

    A provider class with subclasses is a swappable component: each subclass
    sets ``__is_mock__`` and the container picks one of them. A provider
    without subclasses is used as is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
