from walloffame.contributors.schema import Contributor
from walloffame.wall.render import escape_html, generate_wall_of_fame_table


def _c(name: str, roll: str, gh: str) -> Contributor:
    return Contributor(fullName=name, rollNumber=roll, github=gh)


def test_escape_html():
    assert escape_html('a & b <c> "d"') == "a &amp; b &lt;c&gt; &quot;d&quot;"
    # & is escaped first, so entities are not double-processed
    assert escape_html("<") == "&lt;"


def test_table_structure():
    html = generate_wall_of_fame_table(
        [_c("Ada Lovelace", "24bca001", "ada"), _c("Alan Turing", "24bca002", "alan")]
    )
    assert html.startswith("<table>")
    assert html.endswith("</table>")
    assert html.count("<tr>") == 3
    assert "<th>Full Name</th>" in html
    assert "<td>1</td>" in html and "<td>2</td>" in html
    assert "<td><code>24bca001</code></td>" in html
    assert '<a href="https://github.com/alan">@alan</a>' in html
    # rows follow the given order
    assert html.index("Ada Lovelace") < html.index("Alan Turing")


def test_empty_table_has_header_only():
    html = generate_wall_of_fame_table([])
    assert html.count("<tr>") == 1
    assert "<tbody>\n  </tbody>" in html


def test_user_fields_are_escaped():
    html = generate_wall_of_fame_table([_c("Bob <script>", "24bca001", 'x"y')])
    assert "<script>" not in html
    assert "Bob &lt;script&gt;" in html
    assert 'href="https://github.com/x&quot;y"' in html
    assert "@x&quot;y" in html
