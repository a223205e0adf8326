# -*- coding:utf-8 -*-
import logging
from collections import namedtuple
from http.client import HTTPException
from urllib.error import HTTPError
from urllib.parse import urljoin, urlsplit
from urllib.request import Request, urlopen
from xml.parsers.expat import ExpatError
from xmlrpc.client import (
    Fault, ProtocolError, ResponseError, SafeTransport, ServerProxy, Transport,
)

from html5lib import HTMLParser

from . import conf, errors
from .signals import LINKBACK

NOTICE = 25
logging.addLevelName(NOTICE, 'NOTICE')


class PingbackOutcome(namedtuple('PingbackOutcome', 'success code description')):
    '''
    Result of a pingback attempt. Truthy only when the remote server
    accepted the ping; code and description explain a failure.
    '''
    __slots__ = ()

    def __bool__(self):
        return bool(self.success)

SUCCESS = PingbackOutcome(True, None, None)
NO_ENDPOINT = PingbackOutcome(False, None, 'no endpoint')


class _TimeoutMixin:
    def __init__(self, user_agent, timeout, **kwargs):
        super().__init__(**kwargs)
        self.user_agent = user_agent
        self.timeout = timeout

    def make_connection(self, host):
        connection = super().make_connection(host)
        connection.timeout = self.timeout
        return connection

class PingbackTransport(_TimeoutMixin, Transport):
    pass

class SafePingbackTransport(_TimeoutMixin, SafeTransport):
    pass


def absolute(url):
    return 'http:%s' % url if url.startswith('//') else url

def search_link(content, base_url):
    '''
    Returns the href of the first <link rel="pingback"> in an HTML document,
    resolved against base_url.
    '''
    doc = HTMLParser(namespaceHTMLElements=False).parse(content)
    for node in doc.iter('link'):
        rel = node.get('rel', '').lower().split()
        href = node.get('href', '').strip()
        if 'pingback' in rel and href:
            return urljoin(base_url, href)
    return None

def external_urls(html, root_url):
    '''
    Finds external links in an HTML fragment and returns an iterator
    with their URLs.

    root_url defines a root outside of which links are considered external.
    '''
    s, root_host, root_path, q, f = urlsplit(root_url)

    def is_external(url):
        schema, host, path, query, fragment = urlsplit(url)
        return schema in ('', 'http', 'https') and host != '' and \
               (host != root_host or not path.startswith(root_path))

    doc = HTMLParser(namespaceHTMLElements=False).parseFragment(html)
    urls = (n.get('href', '') for n in doc.iter('a'))
    return (u for u in urls if is_external(u))


class PingbackSender:
    '''
    Sends pingbacks (http://hixie.ch/specs/pingback/pingback-1.0) on behalf
    of one configured linkback event.

    Holds no per-request state, so a single instance can be shared between
    threads.
    '''

    def __init__(self, config=LINKBACK, timeout=None, max_content=None, user_agent=None):
        self.config = config
        self.timeout = timeout if timeout is not None else conf.get('LINKBACK_TIMEOUT')
        self.max_content = max_content if max_content is not None else conf.get('LINKBACK_MAX_CONTENT')
        self.user_agent = user_agent or conf.get('LINKBACK_USER_AGENT') or config.user_agent
        self.logger = logging.getLogger(config.logger_name)

    def _fetch(self, url):
        if urlsplit(url).scheme.lower() not in ('http', 'https'):
            raise errors.ParseError('unsupported url scheme: %r' % url)
        try:
            request = Request(url, headers={
                'Accept': 'text/plain',
                'User-Agent': self.user_agent,
            })
            f = urlopen(request, timeout=self.timeout)
        except HTTPError as e:
            raise errors.HttpStatusError(e.code, e.reason)
        except ValueError as e:
            raise errors.ParseError(str(e))
        except (OSError, HTTPException) as e:
            raise errors.TransportError(str(e))
        try:
            endpoint = f.headers.get('X-Pingback', '').strip()
            if endpoint:
                return endpoint, None
            charset = f.headers.get_content_charset() or 'utf-8'
            content = f.read(self.max_content).decode(charset, 'replace')
        except LookupError:
            raise errors.ParseError('Unknown charset')
        except (OSError, HTTPException) as e:
            raise errors.TransportError(str(e))
        finally:
            f.close()
        return None, content

    def discover_endpoint(self, target_url, source_url=None):
        '''
        Looks for the XML-RPC server handling pingbacks for target_url,
        first in the X-Pingback header of the page, then in its
        <link rel="pingback"> element.

        Returns the server URL or None when the target doesn't support
        pingbacks or can't be fetched. Fetch errors are logged and never
        raised.
        '''
        extra = {'source_url': source_url, 'target_url': target_url}
        try:
            endpoint, content = self._fetch(target_url)
        except errors.HttpStatusError as e:
            self.logger.log(NOTICE, 'Failed to fetch url %s due to HTTP error "%s %s"',
                            target_url, e.status, e.reason, extra=extra)
            return None
        except errors.DiscoveryError as e:
            self.logger.log(NOTICE, 'Failed to fetch url %s due to error "%s"',
                            target_url, e, extra=extra)
            return None
        if endpoint:
            return endpoint
        return search_link(content, target_url)

    def _call(self, endpoint, source_url, target_url):
        https = urlsplit(endpoint).scheme.lower() == 'https'
        transport_class = SafePingbackTransport if https else PingbackTransport
        transport = transport_class(self.user_agent, self.timeout)
        try:
            server = ServerProxy(endpoint, transport=transport)
        except OSError as e:
            raise errors.RPCTransportError(str(e))
        try:
            result = server.pingback.ping(source_url, target_url)
        except Fault as fault:
            raise errors.from_fault(fault)
        except ProtocolError as e:
            error = errors.RPCTransportError('%s %s' % (e.errcode, e.errmsg))
            error.faultCode = e.errcode
            raise error
        except (ExpatError, ResponseError) as e:
            raise errors.ResponseParseError(str(e) or None)
        except (OSError, HTTPException) as e:
            raise errors.RPCTransportError(str(e) or None)
        finally:
            server('close')()
        if not result:
            raise errors.EmptyResponse
        return result

    def send(self, source_url, target_url):
        '''
        Makes a pingback request to target_url on behalf of source_url, i.e.
        effectively saying to target_url that "the page at source_url is
        linking to you".

        Both URLs must be absolute. Returns a PingbackOutcome.
        '''
        source_url, target_url = absolute(source_url), absolute(target_url)
        endpoint = self.discover_endpoint(target_url, source_url)
        if not endpoint:
            return NO_ENDPOINT
        try:
            result = self._call(endpoint, source_url, target_url)
        except errors.PingbackProtocolError as e:
            self.logger.error(
                'Pingback to %s from %s failed. Error %s: %s',
                target_url, source_url, e.faultCode, e.faultString,
                extra={
                    'source_url': source_url,
                    'target_url': target_url,
                    'endpoint': endpoint,
                    'code': e.faultCode,
                    'description': e.faultString,
                },
            )
            return PingbackOutcome(False, e.faultCode, e.faultString)
        self.logger.info('Pingback to %s from %s sent: %s', target_url, source_url, result,
                         extra={'source_url': source_url, 'target_url': target_url, 'endpoint': endpoint})
        return SUCCESS

    def ping_external_urls(self, source_url, html, root_url):
        '''
        Makes pingback requests to all external links in an HTML fragment.

        source_url is a URL of the page contaning HTML fragment.
        root_url defines a root outside of which links are considered external.

        Returns a list of (target_url, PingbackOutcome).
        '''
        return [(url, self.send(source_url, url)) for url in external_urls(html, root_url)]


_default = None

def default_sender():
    '''
    Sender behind the module-level helpers. It is built on first use, so
    LINKBACK_* settings changed after that are not picked up.
    '''
    global _default
    if _default is None:
        _default = PingbackSender(LINKBACK)
    return _default

def discover_endpoint(target_url):
    return default_sender().discover_endpoint(target_url)

def ping(source_url, target_url):
    return default_sender().send(source_url, target_url)

def ping_external_urls(source_url, html, root_url):
    return default_sender().ping_external_urls(source_url, html, root_url)
