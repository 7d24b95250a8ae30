import factory

from aq_monitor_core.domain.models import AirQualityCategory, Reading


class ReadingFactory(factory.Factory):
    class Meta:
        model = Reading

    pm1 = factory.Sequence(lambda n: 3.0 + n)
    pm25 = factory.Sequence(lambda n: 8.5 + n)
    pm4 = factory.Sequence(lambda n: 9.0 + n)
    pm10 = factory.Sequence(lambda n: 10.0 + n)
    temperature = 22.4
    humidity = 41.0
    voc = 101.0
    nox = 1.0
    quality = AirQualityCategory.GOOD


class CurrentFrameFactory(factory.DictFactory):
    type = "current"
    pm1 = 3.2
    pm25 = 8.7
    pm4 = 9.4
    pm10 = 10.1
    temperature = 22.46
    humidity = 41.23
    voc = 101.5
    nox = 1.4
    quality = "GOOD"


class HistoryEntryFactory(factory.DictFactory):
    pm25 = factory.Sequence(lambda n: 5.0 + n)
    temperature = factory.Sequence(lambda n: 20.0 + n / 10)
    humidity = 40.0
    voc = 100
    timestamp = factory.Sequence(lambda n: 1000 * n)


class StatusFrameFactory(factory.DictFactory):
    type = "status"
    uptime = 5400
    clients = 2
    freeHeap = 50000
    heapSize = 100000
