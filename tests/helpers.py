import email.message


class FakeResponse:
    def __init__(self, body=b'', headers=None, content_type='text/html; charset=utf-8'):
        self.body = body
        self.headers = email.message.Message()
        if content_type:
            self.headers['Content-Type'] = content_type
        for name, value in (headers or {}).items():
            self.headers[name] = value
        self.closed = False

    def read(self, amount=None):
        return self.body[:amount] if amount is not None else self.body

    def close(self):
        self.closed = True
