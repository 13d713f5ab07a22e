import threading

import pytest

from simplyserver import ServerCfg, build_server


@pytest.fixture
def server():
    httpd = build_server(ServerCfg(host="127.0.0.1", port=0))
    t = threading.Thread(target=httpd.serve_forever, daemon=True)
    t.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()
    t.join(timeout=5)


@pytest.fixture
def port(server):
    return server.server_address[1]
