import pytest

from NorwayPolls.config import get_config
from NorwayPolls.normalize import TableNormalizer


POP_PAGE = """
<html><body>
<div id="content">
  <h1>Gjennomsnitt av målinger</h1>
  <table>
    <tr><th>Måling</th><th>Ap</th><th>Høyre</th><th>Frp</th></tr>
    <tr><td>Uke 2-2015</td><td>30,1 (55)</td><td>25,0 (45)</td><td>15,2 (28)</td></tr>
    <tr><td>Uke 1-2014</td><td>31,0 (56)</td><td>24,5 (44)</td><td>14,9 (27)</td></tr>
    <tr><td>Uke 52-2014</td><td>29,0 (53)</td><td>26,0 (47)</td></tr>
    <tr><td>Valg 2013</td><td>30,8 (55)</td><td>26,8 (48)</td><td>16,3 (29)</td></tr>
  </table>
</div>
</body></html>
"""

INFACT_PAGE = """
<html><body>
<div id="content">
  <table>
    <thead><tr><th>Parti</th><th>Jan</th><th>Feb</th><th>Aug I</th><th>Aug II</th></tr></thead>
    <tbody>
      <tr><td>Ap</td><td>30,5</td><td>31,2 %</td><td></td><td>29,0</td></tr>
      <tr><td>Høyre</td><td>24,0</td><td>23,1</td><td>25,5</td><td>26,0</td></tr>
      <tr><td>Total</td><td>100</td><td>100</td><td>100</td><td>100</td></tr>
    </tbody>
  </table>
  <table>
    <thead><tr><th>Parti</th><th>Des</th></tr></thead>
    <tbody>
      <tr><td>Andre partier</td><td>3,3</td></tr>
    </tbody>
  </table>
</div>
</body></html>
"""


@pytest.fixture
def config():
    return get_config()


@pytest.fixture
def normalizer(config):
    return TableNormalizer(config)


@pytest.fixture
def pop_page():
    return POP_PAGE


@pytest.fixture
def infact_page():
    return INFACT_PAGE
