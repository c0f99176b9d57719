import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.entities = MagicMock()
    uow.entities.get = AsyncMock(return_value=None)
    uow.entities.find_one = AsyncMock(return_value=None)
    uow.entities.list = AsyncMock(return_value=[])
    uow.entities.create = AsyncMock()
    uow.entities.update = AsyncMock()
    uow.entities.delete = AsyncMock(return_value=True)
    return uow
