# Shared fixtures for sorter tests: small HTML documents and item records.

import pytest
from bs4 import BeautifulSoup

from sorting.adapters import ObjectAdapter, SoupAdapter

LIST_HTML = """
<ul id="people">
  <li data-age="31" data-row="2" class="person"><span class="name">Carol</span></li>
  <li data-age="25" data-row="0" class="person"><span class="name">alice</span></li>
  <li data-row="1" class="person"><span class="name">Bob</span></li>
</ul>
"""


@pytest.fixture
def soup():
    return BeautifulSoup(LIST_HTML, "html.parser")


@pytest.fixture
def people(soup):
    return soup.select("#people > li")


@pytest.fixture
def soup_adapter():
    return SoupAdapter()


@pytest.fixture
def object_adapter():
    return ObjectAdapter()
