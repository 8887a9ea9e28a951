from railfeed.jobs.consume.sources.darwin.source import DarwinPushPortSource

SOURCES = {
    "darwin": DarwinPushPortSource,
}
