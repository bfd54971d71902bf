from mapsoracle.counters import ApiCallCounter


def test_counter_tallies_per_endpoint():
    c = ApiCallCounter()
    assert c.total() == 0
    assert c["SnapToRoads"] == 0

    c.increment("SnapToRoads")
    c.increment("Metadata")
    c.increment("Metadata")

    assert c.total() == 3
    assert c["Metadata"] == 2
    assert c.as_dict() == {"SnapToRoads": 1, "Metadata": 2}


def test_as_dict_is_a_copy():
    c = ApiCallCounter()
    c.increment("Metadata")
    d = c.as_dict()
    d["Metadata"] = 99
    assert c["Metadata"] == 1
