import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def cafehub_bed():
    from cafehub.domain import cafehub

    bed = DomainFixture(cafehub)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(cafehub_bed):
    with cafehub_bed.domain_context():
        yield

        # Clear all databases and the event store after every test
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()
