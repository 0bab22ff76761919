import pytest

from portchecker.registry import ProcessRegistry

LSOF_HEADER = "COMMAND     PID   USER   FD   TYPE             DEVICE SIZE/OFF NODE NAME"

class FakeSource:
    def __init__(self, output=""):
        self.output = output
        self.calls = []

    def list(self, flt):
        self.calls.append(flt)
        return self.output(flt) if callable(self.output) else self.output

class ManualSpawner:
    """Collects worker callables so a test decides when each one finishes."""

    def __init__(self):
        self.jobs = []

    def __call__(self, fn):
        self.jobs.append(fn)

    def run_all(self):
        jobs, self.jobs = self.jobs, []
        for fn in jobs:
            fn()

def lsof_output(*rows):
    return "\n".join([LSOF_HEADER, *rows]) + "\n"

@pytest.fixture
def spawner():
    return ManualSpawner()

@pytest.fixture
def source():
    return FakeSource()

@pytest.fixture
def registry(source, spawner):
    return ProcessRegistry(source, spawn=spawner)
