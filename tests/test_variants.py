from hls_mirror.playlist.variants import select_variants

BASE = "https://example.com/live/master.m3u8"

MASTER_PLAYLIST = """#EXTM3U
#EXT-X-STREAM-INF:BANDWIDTH=1280000,RESOLUTION=640x360
low/index.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=2560000,RESOLUTION=1280x720
/mid/index.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=7680000,RESOLUTION=1920x1080
https://cdn.example.org/high/index.m3u8
"""


def test_variants_are_resolved_in_order():
    assert select_variants(BASE, MASTER_PLAYLIST) == [
        "https://example.com/live/low/index.m3u8",
        "https://example.com/mid/index.m3u8",
        "https://cdn.example.org/high/index.m3u8",
    ]


def test_media_playlist_has_no_variants():
    text = "#EXTM3U\n#EXTINF:10,\nseg-0.ts\n#EXT-X-ENDLIST\n"
    assert select_variants(BASE, text) == []


def test_comments_and_blank_lines_between_tag_and_uri_are_skipped():
    text = "#EXTM3U\r\n#EXT-X-STREAM-INF:BANDWIDTH=1\r\n\r\n#EXT-X-ANOTHER\r\nv1.m3u8\r\n"
    assert select_variants(BASE, text) == ["https://example.com/live/v1.m3u8"]


def test_unresolvable_variant_is_skipped():
    text = (
        "#EXTM3U\n"
        "#EXT-X-STREAM-INF:BANDWIDTH=1\nbad%zz.m3u8\n"
        "#EXT-X-STREAM-INF:BANDWIDTH=2\ngood.m3u8\n"
    )
    assert select_variants(BASE, text) == ["https://example.com/live/good.m3u8"]


def test_plain_uri_lines_without_stream_tag_are_not_variants():
    text = "#EXTM3U\n#EXT-X-MEDIA:TYPE=AUDIO,URI=\"audio.m3u8\"\nother.m3u8\n"
    assert select_variants(BASE, text) == []


def test_iframe_streams_are_not_followed():
    text = (
        "#EXTM3U\n"
        '#EXT-X-I-FRAME-STREAM-INF:BANDWIDTH=100,URI="iframe.m3u8"\n'
        "#EXT-X-STREAM-INF:BANDWIDTH=2000\nmain.m3u8\n"
    )
    assert select_variants(BASE, text) == ["https://example.com/live/main.m3u8"]
