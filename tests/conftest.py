"""
Shared response fixtures
"""
import pytest

from paperlearner.core.registry import load_registry


ARXIV_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/"
      xmlns:arxiv="http://arxiv.org/schemas/atom">
  <title type="html">ArXiv Query: id_list=2301.07041</title>
  <opensearch:totalResults>1</opensearch:totalResults>
  <entry>
    <id>http://arxiv.org/abs/2301.07041</id>
    <published>2023-01-17T00:00:00Z</published>
    <title>Example
      Paper</title>
    <summary>  We describe an example.
    </summary>
    <author>
      <name>A. Researcher</name>
    </author>
    <arxiv:doi>10.1000/example.2023</arxiv:doi>
    <link href="http://arxiv.org/abs/2301.07041" rel="alternate" type="text/html"/>
    <link title="pdf" href="http://arxiv.org/pdf/2301.07041" rel="related" type="application/pdf"/>
  </entry>
</feed>
"""

ARXIV_FEED_THREE_AUTHORS = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <entry>
    <id>http://arxiv.org/abs/2301.00001v2</id>
    <published>2023-01-02T10:11:12Z</published>
    <title>Three Authors</title>
    <summary>Ordering matters.</summary>
    <author><name>A</name></author>
    <author><name>B</name></author>
    <author><name>C</name></author>
  </entry>
</feed>
"""

ARXIV_FEED_NO_ENTRY = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title type="html">ArXiv Query: id_list=9999.99999</title>
</feed>
"""

IACR_RECORD = b"""<?xml version="1.0" encoding="UTF-8"?>
<OAI-PMH xmlns="http://www.openarchives.org/OAI/2.0/"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <responseDate>2024-01-01T00:00:00Z</responseDate>
  <GetRecord>
    <record>
      <header>
        <identifier>oai:eprint.iacr.org:2016/260</identifier>
      </header>
      <metadata>
        <oai_dc:dc xmlns:oai_dc="http://www.openarchives.org/OAI/2.0/oai_dc/"
                   xmlns:dc="http://purl.org/dc/elements/1.1/">
          <dc:title>On the Security of Something</dc:title>
          <dc:creator>Alice Cryptographer</dc:creator>
          <dc:creator>Bob Analyst</dc:creator>
          <dc:description>An abstract about security.</dc:description>
          <dc:date>2016-03-15</dc:date>
          <dc:identifier>https://eprint.iacr.org/2016/260</dc:identifier>
        </oai_dc:dc>
      </metadata>
    </record>
  </GetRecord>
</OAI-PMH>
"""

CROSSREF_WORK = b"""{
  "status": "ok",
  "message": {
    "DOI": "10.1145/1327452.1327492",
    "title": ["MapReduce: simplified data processing on large clusters"],
    "author": [
      {"given": "Jeffrey", "family": "Dean", "sequence": "first"},
      {"given": "Sanjay", "family": "Ghemawat", "sequence": "additional"}
    ],
    "created": {"date-time": "2008-01-01T05:00:00Z"},
    "link": [{"URL": "https://dl.acm.org/doi/pdf/10.1145/1327452.1327492"}]
  }
}"""


@pytest.fixture
def registry():
    return load_registry()


@pytest.fixture
def arxiv_source(registry):
    return registry["arxiv"]


@pytest.fixture
def iacr_source(registry):
    return registry["iacr"]


@pytest.fixture
def doi_source(registry):
    return registry["doi"]


@pytest.fixture
def arxiv_feed():
    return ARXIV_FEED


@pytest.fixture
def iacr_record():
    return IACR_RECORD


@pytest.fixture
def crossref_work():
    return CROSSREF_WORK


@pytest.fixture
def arxiv_feed_three_authors():
    return ARXIV_FEED_THREE_AUTHORS


@pytest.fixture
def arxiv_feed_no_entry():
    return ARXIV_FEED_NO_ENTRY
