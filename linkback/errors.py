# -*- coding:utf-8 -*-
from xmlrpc.client import Fault


class DiscoveryError(Exception):
    '''
    Failure to fetch a target page while looking for its pingback endpoint.
    Never leaves the discovery step: it is logged and treated as "no endpoint".
    '''

class TransportError(DiscoveryError):
    pass

class HttpStatusError(DiscoveryError):
    def __init__(self, status, reason):
        super().__init__('%s %s' % (status, reason))
        self.status = status
        self.reason = reason

class ParseError(DiscoveryError):
    pass


class PingbackProtocolError(Fault):
    code = 0
    message = 'Unknown error'

    def __init__(self, message=None, **kwargs):
        message = message or self.message
        super().__init__(self.code, message, **kwargs)

class EmptyResponse(PingbackProtocolError):
    code = 0
    message = 'Empty response'

class SourceNotFound(PingbackProtocolError):
    code = 16
    message = 'Source URL is not found'

class TargetNotFoundUnderSource(PingbackProtocolError):
    code = 17
    message = 'Target URL is not found under source URL'

class TargetDoesNotExist(PingbackProtocolError):
    code = 32
    message = 'Target URL does not exist'

class UnpingableTarget(PingbackProtocolError):
    code = 33
    message = 'Target does not accept pingbacks'

class DuplicatePing(PingbackProtocolError):
    code = 48
    message = 'Pingback has already been registered'

class AccessDenied(PingbackProtocolError):
    code = 49
    message = 'AccessDenied'

class UpstreamError(PingbackProtocolError):
    code = 50
    message = 'Server could not communicate with upstream'

class ResponseParseError(PingbackProtocolError):
    code = -32700
    message = 'Parse error, not well formed'

class RPCTransportError(PingbackProtocolError):
    code = -32300
    message = 'Transport error'

FAULTS = dict((cls.code, cls) for cls in [
    SourceNotFound, TargetNotFoundUnderSource, TargetDoesNotExist,
    UnpingableTarget, DuplicatePing, AccessDenied, UpstreamError,
])

def from_fault(fault):
    '''
    Converts a Fault returned by a remote server into the matching
    PingbackProtocolError, keeping the server's own description. Unknown
    codes are kept as is.
    '''
    cls = FAULTS.get(fault.faultCode)
    if cls is None:
        error = PingbackProtocolError(fault.faultString)
        error.faultCode = fault.faultCode
        return error
    return cls(fault.faultString)
