import pytest
from bs4 import BeautifulSoup

from services import html_sort
from sorting.errors import ContainerNotFoundError

TABLE_HTML = """
<table>
  <tbody id="rows">
    <tr data-rank="3"><td class="name">Gamma</td><td class="pts">7</td></tr>
    <tr data-rank="1"><td class="name">Alpha</td><td class="pts">9</td></tr>
    <tr><td class="name">Beta</td><td class="pts">9</td></tr>
  </tbody>
</table>
<ol class="list"><li>b</li><li>a</li></ol>
<ol class="list"><li>d</li><li>c</li></ol>
"""


def _texts(html, selector):
    soup = BeautifulSoup(html, "html.parser")
    return [el.get_text() for el in soup.select(selector)]


def test_sort_html_by_attribute_moves_missing_last():
    out = html_sort.sort_html(TABLE_HTML, "#rows", by="data-rank")
    assert _texts(out, "#rows td.name") == ["Alpha", "Gamma", "Beta"]


def test_sort_html_multi_rule_with_selector():
    out = html_sort.sort_html(TABLE_HTML, "#rows", by="{td.pts} >, {td.name}")
    assert _texts(out, "#rows td.name") == ["Alpha", "Beta", "Gamma"]


def test_sort_html_default_rule_and_all_containers():
    out = html_sort.sort_html(TABLE_HTML, "ol.list", all_containers=True)
    assert _texts(out, "ol.list li") == ["a", "b", "c", "d"]
    first_only = html_sort.sort_html(TABLE_HTML, "ol.list")
    assert _texts(first_only, "ol.list li") == ["a", "b", "d", "c"]


def test_sort_html_reverse():
    out = html_sort.sort_html(TABLE_HTML, "ol.list", reverse=True, all_containers=True)
    assert _texts(out, "ol.list li") == ["b", "a", "d", "c"]


def test_missing_container_raises():
    with pytest.raises(ContainerNotFoundError) as info:
        html_sort.sort_html(TABLE_HTML, "ul.none")
    assert info.value.context == {"selector": "ul.none"}


def test_sort_children_keeps_in_place_prefix():
    soup = BeautifulSoup("<ul><li>a</li><li>c</li><li>b</li></ul>", "html.parser")
    ul = soup.select_one("ul")
    first = ul.select_one("li")
    result = html_sort.sort_children(ul, html_sort.make_sorter(""))
    assert result.moved == 2
    assert [li.get_text() for li in ul.find_all("li")] == ["a", "b", "c"]
    assert ul.select_one("li") is first


def test_already_sorted_container_is_untouched():
    html = "<ul><li>a</li> <li>b</li></ul>"
    soup = BeautifulSoup(html, "html.parser")
    result = html_sort.sort_children(soup.select_one("ul"), html_sort.make_sorter(None))
    assert result.moved == 0
    assert str(soup) == html
