"""Shared feed documents and HTTP doubles for tests."""

FEED_URL = "https://medium.example.com/feed/@tester"

MEDIUM_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss xmlns:content="http://purl.org/rss/1.0/modules/content/" version="2.0">
  <channel>
    <title><![CDATA[Stories by Tester on Medium]]></title>
    <link>https://medium.example.com/@tester</link>
    <item>
      <title><![CDATA[Scaling Teams &amp; Culture]]></title>
      <link>https://medium.example.com/@tester/scaling-teams-1</link>
      <guid isPermaLink="false">https://medium.com/p/1</guid>
      <category><![CDATA[leadership]]></category>
      <category><![CDATA[hr]]></category>
      <pubDate>Mon, 10 Feb 2025 10:00:00 GMT</pubDate>
      <description>&lt;p&gt;Growing&amp;nbsp;a team is hard.&lt;/p&gt;</description>
      <content:encoded><![CDATA[<figure><img alt="" src="https://cdn.example.com/cover-1.png" /></figure><p>Growing a team is hard.</p>]]></content:encoded>
    </item>
    <item>
      <title>Second Post</title>
      <link>https://medium.example.com/@tester/second-post-2</link>
      <category>leadership</category>
      <pubDate>Tue, 11 Feb 2025 10:00:00 GMT</pubDate>
      <description><![CDATA[<p>No images here.</p>]]></description>
    </item>
  </channel>
</rss>"""


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200):
        self.text = text
        self.status_code = status_code


