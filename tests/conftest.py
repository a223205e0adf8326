from unittest.mock import patch

import pytest
from django.conf import settings

if not settings.configured:
    settings.configure(
        DEBUG=False,
        LINKBACK_TIMEOUT=5,
    )

@pytest.fixture
def urlopen():
    with patch('linkback.client.urlopen') as mock:
        yield mock

@pytest.fixture
def server_proxy():
    with patch('linkback.client.ServerProxy') as mock:
        yield mock
