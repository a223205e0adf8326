'''
Client side of the Pingback protocol
(http://hixie.ch/specs/pingback/pingback-1.0).

Discovers pingback servers of linked pages through the X-Pingback header or
an HTML <link rel="pingback"> element and notifies them with a
pingback.ping XML-RPC call. Sending can be triggered directly or through
the linkback_send / vinculum_send Django signals.
'''

from .client import PingbackSender, PingbackOutcome, external_urls, \
                    discover_endpoint, ping, ping_external_urls
from .signals import SenderConfig, LINKBACK, VINCULUM, linkback_send, \
                     vinculum_send, connect, disconnect
from .errors import SourceNotFound, TargetNotFoundUnderSource, \
                    TargetDoesNotExist, UnpingableTarget, DuplicatePing, \
                    AccessDenied, UpstreamError
