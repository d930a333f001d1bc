import pytest

from containerps.backend import ExecutionError
from containerps.config import AppConfig
from containerps.state import AppContext

HEADER = (
    "CONTAINER ID   IMAGE            COMMAND                  CREATED         "
    "STATUS                          PORTS                NAMES     SIZE"
)
WEB_LINE = (
    'a1b2c3d4e5f6   nginx:latest     "/docker-entrypoint.…"   2 hours ago     '
    "Up 2 hours                      0.0.0.0:80->80/tcp   web       2B (virtual 187MB)"
)
DB_LINE = (
    'b2c3d4e5f6a1   postgres:16      "docker-entrypoint.s…"   3 days ago      '
    "Exited (0) 2 days ago                                db        63B (virtual 432MB)"
)
WORKER_LINE = (
    'c3d4e5f6a1b2   myapp/worker     "bash -c run.sh"         5 minutes ago   '
    "Restarting (1) 10 seconds ago                        worker    0B (virtual 91MB)"
)


def listing(*lines):
    return "\n".join([HEADER, *lines]) + "\n"


class FakeSink:
    def __init__(self):
        self.menus = []
        self.loading = []

    def set_menu(self, menu):
        self.menus.append(menu)

    def set_loading(self, loading):
        self.loading.append(loading)


class FakeDialog:
    def __init__(self, answer=1):
        self.answer = answer
        self.requests = []

    async def confirm(self, request):
        self.requests.append(request)
        return self.answer


class FakeRunner:
    """Records every engine call; listing text comes from `listing_text`."""

    def __init__(self, listing_text="", failing=()):
        self.listing_text = listing_text
        self.failing = set(failing)
        self.calls = []
        self.launched = []

    def run(self, program, args):
        self.calls.append([program, *args])
        verb = args[0]
        if verb in self.failing:
            raise ExecutionError(f"Error response from daemon: {verb} failed", command=[program, *args], returncode=1)
        if verb == "container":
            return self.listing_text
        return args[-1] + "\n"

    def fire_and_forget(self, command):
        self.launched.append(list(command))


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def make_context(sink):
    def factory(runner, dialog=None, clipboard=None, config=None):
        return AppContext.create(
            config or AppConfig(),
            sink=sink,
            dialog=dialog or FakeDialog(),
            runner=runner,
            clipboard=clipboard or (lambda text: True),
        )
    return factory
