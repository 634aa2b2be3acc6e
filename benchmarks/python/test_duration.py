from tempo import Duration, Unit


def test_new(benchmark):
    benchmark(Duration, hours=4, minutes=30, seconds=15)


def test_format(benchmark):
    d = Duration(days=375, hours=4, minutes=30)
    benchmark(d.format)


def test_format_as_many(benchmark):
    d = Duration(days=375, hours=4, minutes=30)
    units = [Unit.DAY, Unit.HOUR, Unit.MINUTE]
    benchmark(d.format_as_many, units)


def test_parse_common_iso(benchmark):
    benchmark(Duration.parse_common_iso, "PT36H12M5.25S")
