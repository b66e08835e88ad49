"""StatsD metrics of icon resolution.

Metric names are namespaced with `linkmark.` and tagged with the environment, e.g.
`linkmark.icons.resolve:1|c|#icon_type:html,env:production`.
"""

import logging
from functools import cache

import aiodogstatsd
from dynaconf import Dynaconf

from linkmark.configs import settings

logger = logging.getLogger(__name__)


def create_metrics_client(config: Dynaconf) -> aiodogstatsd.Client:
    """Build a StatsD client from the `metrics` and `deployment` settings of `config`."""
    return aiodogstatsd.Client(
        host=config.metrics.host,
        port=config.metrics.port,
        namespace="linkmark",
        constant_tags={
            "env": config.current_env.lower(),
            "deployment.canary": int(config.deployment.canary),
        },
    )


@cache
def get_metrics_client() -> aiodogstatsd.Client:
    """Return the StatsD client shared by the resolver and the cache."""
    return create_metrics_client(settings)


async def configure_metrics() -> None:
    """Connect the shared client. With `metrics.dev_logger`, datagrams are logged instead."""
    client = get_metrics_client()
    if settings.metrics.dev_logger:
        client._protocol = DatagramLogger()
    await client.connect()


class DatagramLogger(aiodogstatsd.client.DatagramProtocol):
    """Log every metric of a StatsD datagram at DEBUG rather than sending it."""

    def send(self, data: bytes) -> None:
        for line in data.decode("utf-8").splitlines():
            name, _, sample = line.partition(":")
            logger.debug(f"metric {name}", extra={"metric": name, "sample": sample})
