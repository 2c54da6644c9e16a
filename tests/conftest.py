import pytest

from wordcraft import config
from wordcraft.dictionary import DictionaryService

@pytest.fixture
def words():
    return DictionaryService(['AT', 'TA', 'CAT', 'CATS', 'OX', 'AX', 'CO', 'DOG', 'GO', 'TO'])

@pytest.fixture
def no_think_delay(monkeypatch):
    monkeypatch.setattr(config, 'AI_THINK_DELAY', (0.0, 0.0))
