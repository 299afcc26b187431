"""
Test request construction
"""
from paperlearner.core.request_builder import build_request


class TestBuildRequest:
    """Test build_request()"""

    def test_arxiv(self, arxiv_source):
        request = build_request(arxiv_source, "2301.07041")
        assert request.url == "http://export.arxiv.org/api/query?id_list=2301.07041&max_results=1"
        assert request.headers == {"Accept": "application/xml"}

    def test_iacr_keeps_slash(self, iacr_source):
        request = build_request(iacr_source, "2016/260")
        assert "identifier=oai:eprint.iacr.org:2016/260&" in request.url

    def test_doi(self, doi_source):
        request = build_request(doi_source, "10.1145/1327452.1327492")
        assert request.url == "https://api.crossref.org/works/10.1145/1327452.1327492"

    def test_unsafe_characters_quoted(self, doi_source):
        request = build_request(doi_source, "10.1002/(SICI)1097 x")
        assert request.url.endswith("10.1002/%28SICI%291097%20x")

    def test_headers_are_copied(self, arxiv_source):
        request = build_request(arxiv_source, "2301.07041")
        request.headers["X-Test"] = "1"
        assert "X-Test" not in arxiv_source.headers
