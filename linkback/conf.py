# -*- coding:utf-8 -*-
'''
Library settings. Values come from Django settings when a project has
configured them and fall back to the defaults below otherwise, so the
client is usable from plain scripts too.

- LINKBACK_TIMEOUT: seconds to wait for the discovery request and for the
  XML-RPC call
- LINKBACK_MAX_CONTENT: how many bytes of a target page are searched for
  <link rel="pingback">
- LINKBACK_USER_AGENT: overrides the User-Agent of every sender
'''
from django.conf import settings

DEFAULTS = {
    'LINKBACK_TIMEOUT': 10,
    'LINKBACK_MAX_CONTENT': 512 * 1024,
    'LINKBACK_USER_AGENT': None,
}

def get(name):
    default = DEFAULTS[name]
    if not settings.configured:
        return default
    return getattr(settings, name, default)
