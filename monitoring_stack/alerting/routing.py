"""
Alert routing.

Models the route tree and receivers of an Alertmanager config and resolves
which receivers an alert with a given label set is delivered to. Routing is
a pure lookup: no state, no timers, no grouping.

Resolution follows Alertmanager: the root route matches every alert; within
a matching route the children are tried in order, the first match wins
unless it sets ``continue: true``; when no child matches the route's own
receiver is used. Children without a receiver inherit their parent's.

Usage:
    router = load_alertmanager_config("alertmanager/devops/alertmanager.yaml")
    router.validate()
    router.resolve({"severity": "critical", "team": "platform"})
    # ['pagerduty-platform']
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from monitoring_stack.core.exceptions import ConfigurationError

# name op value, value optionally double-quoted
_MATCHER_RE = re.compile(r'^\s*([a-zA-Z_][a-zA-Z0-9_]*)\s*(=~|!~|!=|=)\s*(.*?)\s*$')


@dataclass(frozen=True)
class Matcher:
    """A single label matcher (=, !=, =~, !~)."""

    name: str
    op: str
    value: str

    def matches(self, labels: dict[str, str]) -> bool:
        actual = labels.get(self.name, "")
        if self.op == "=":
            return actual == self.value
        if self.op == "!=":
            return actual != self.value
        matched = re.fullmatch(self.value, actual) is not None
        return matched if self.op == "=~" else not matched

    @classmethod
    def parse(cls, expr: str) -> "Matcher":
        """Parse a ``name<op>value`` matcher string."""
        m = _MATCHER_RE.match(expr)
        if not m:
            raise ConfigurationError(f"Invalid matcher: {expr!r}", config_key="matchers")
        name, op, value = m.groups()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        if op in ("=~", "!~"):
            try:
                re.compile(value)
            except re.error as e:
                raise ConfigurationError(f"Invalid regex in matcher {expr!r}: {e}", config_key="matchers") from e
        return cls(name=name, op=op, value=value)


@dataclass(frozen=True)
class Receiver:
    """A named notification destination."""

    name: str
    kind: str = "null"


@dataclass
class Route:
    """A node of the routing tree."""

    receiver: str
    matchers: list[Matcher] = field(default_factory=list)
    routes: list["Route"] = field(default_factory=list)
    continue_: bool = False

    def matches(self, labels: dict[str, str]) -> bool:
        return all(m.matches(labels) for m in self.matchers)

    def walk(self):
        yield self
        for child in self.routes:
            yield from child.walk()


def _receiver_kind(config: dict[str, Any]) -> str:
    for key in config:
        if key.endswith("_configs") and config[key]:
            return key[: -len("_configs")]
    return "null"


def _parse_route(data: dict[str, Any], parent_receiver: Optional[str]) -> Route:
    if not isinstance(data, dict):
        raise ConfigurationError("Each route must be a mapping", config_key="route")

    receiver = data.get("receiver") or parent_receiver
    if not receiver:
        raise ConfigurationError("Root route must name a receiver", config_key="route.receiver")

    matchers: list[Matcher] = []
    for name, value in (data.get("match") or {}).items():
        matchers.append(Matcher(name=str(name), op="=", value=str(value)))
    for name, value in (data.get("match_re") or {}).items():
        matchers.append(Matcher.parse(f"{name}=~{value}"))
    for expr in data.get("matchers") or []:
        matchers.append(Matcher.parse(str(expr)))

    children = [_parse_route(child, receiver) for child in data.get("routes") or []]

    return Route(
        receiver=receiver,
        matchers=matchers,
        routes=children,
        continue_=bool(data.get("continue", False)),
    )


class AlertRouter:
    """Resolve alert labels to receivers over a parsed route tree."""

    def __init__(self, route: Route, receivers: list[Receiver]):
        self.route = route
        self.receivers = {r.name: r for r in receivers}

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "AlertRouter":
        """Build a router from a parsed Alertmanager config mapping."""
        if not isinstance(config, dict) or "route" not in config:
            raise ConfigurationError("Alertmanager config must contain a 'route'", config_key="route")

        receivers = []
        for entry in config.get("receivers") or []:
            if not isinstance(entry, dict) or not entry.get("name"):
                raise ConfigurationError("Every receiver needs a name", config_key="receivers")
            receivers.append(Receiver(name=entry["name"], kind=_receiver_kind(entry)))

        return cls(_parse_route(config["route"], None), receivers)

    def validate(self) -> None:
        """
        Check every route points at a defined receiver.

        Raises:
            ConfigurationError: Listing the undefined receiver names
        """
        missing = sorted({r.receiver for r in self.route.walk()} - set(self.receivers))
        if missing:
            raise ConfigurationError(
                f"Routes reference undefined receivers: {', '.join(missing)}",
                config_key="receivers",
            )

    def resolve(self, labels: dict[str, str]) -> list[str]:
        """Return the receiver names an alert with these labels is sent to."""
        return self._resolve(self.route, labels)

    def _resolve(self, route: Route, labels: dict[str, str]) -> list[str]:
        matched: list[str] = []
        for child in route.routes:
            if not child.matches(labels):
                continue
            matched.extend(self._resolve(child, labels))
            if not child.continue_:
                break
        return matched or [route.receiver]


def load_alertmanager_config(path: Union[str, Path]) -> AlertRouter:
    """
    Parse an Alertmanager YAML file into an AlertRouter.

    Raises:
        ConfigurationError: File missing or not valid YAML/config
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Alertmanager config not found: {path}", config_key="alertmanager_dir") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", config_key="alertmanager_dir") from e
    return AlertRouter.from_config(data)
