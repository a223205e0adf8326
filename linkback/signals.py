# -*- coding:utf-8 -*-
from collections import namedtuple

from django import dispatch

# Send one of these signals whenever a piece of content starts linking to
# another page. Keyword arguments:
#
# - sender: whatever object triggered sending, usually the content model
# - source_url: absolute URL of the linking page
# - target_url: absolute URL of the page being linked to
#
# A sender connected with connect() returns a PingbackOutcome, so the
# result of each attempt is available in the responses of Signal.send().

linkback_send = dispatch.Signal()
vinculum_send = dispatch.Signal()

SIGNALS = {
    'linkback_send': linkback_send,
    'vinculum_send': vinculum_send,
}

SenderConfig = namedtuple('SenderConfig', 'event_name user_agent logger_name')

LINKBACK = SenderConfig(
    event_name='linkback_send',
    user_agent='Linkback Pingback (linkback_send)',
    logger_name='linkback.pingback',
)

VINCULUM = SenderConfig(
    event_name='vinculum_send',
    user_agent='Linkback Pingback (vinculum_send)',
    logger_name='linkback.vinculum',
)

def _signal(config):
    try:
        return SIGNALS[config.event_name]
    except KeyError:
        raise ValueError('Unknown linkback event "%s"' % config.event_name)

def connect(config=LINKBACK, pingback_sender=None):
    '''
    Connects a PingbackSender to the signal named by config.event_name and
    returns it. Pass an already built sender to control its timeout.

    The receiver is registered under the event name as dispatch_uid, so
    connecting the same event again keeps the first sender.
    '''
    from .client import PingbackSender

    signal = _signal(config)
    pingback_sender = pingback_sender or PingbackSender(config)

    def receiver(sender, source_url, target_url, **kwargs):
        return pingback_sender.send(source_url, target_url)

    signal.connect(receiver, weak=False, dispatch_uid=config.event_name)
    return pingback_sender

def disconnect(config=LINKBACK):
    return _signal(config).disconnect(dispatch_uid=config.event_name)
