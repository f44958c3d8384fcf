import pytest

from processingformats.errors import EntityTypeError
from processingformats.jsoncodec import deserialize
from processingformats.traveltime import TravelTimeData, TravelTimePlotData, TravelTimeRequest

DATA_JSON = {
    "Phase": "Pg",
    "TravelTime": 22.456,
    "DistanceDerivative": 19.04,
    "DepthDerivative": 0.000,
    "RayDerivative": 0.0001,
    "StatisticalSpread": 1.65,
    "Observability": 0.45,
    "TeleseismicPhaseGroup": "P",
    "AuxiliaryPhaseGroup": "PKP",
    "LocationUseFlag": True,
    "AssociationWeightFlag": False,
}

PLOT_JSON = {
    "Phase": "P",
    "Distance": [0.0, 1.0, 2.0],
    "TravelTime": [0.0, 15.5, 29.8],
    "StatisticalSpread": [1.0, 1.1, 1.2],
    "Observability": [0.9, 0.8, 0.7],
}

REQUEST_STRING = (
    '{"Type":"Plot","Distance":45.2,"Elevation":0.5,"Latitude":40.3344,"Longitude":-121.44,'
    '"Data":[{"Phase":"Pg","TravelTime":22.456,"DistanceDerivative":19.04,'
    '"DepthDerivative":0.0,"RayDerivative":0.0001,"StatisticalSpread":1.65,'
    '"Observability":0.45,"TeleseismicPhaseGroup":"P","AuxiliaryPhaseGroup":"PKP",'
    '"LocationUseFlag":true,"AssociationWeightFlag":false}],'
    '"PlotData":[{"Phase":"P","Distance":[0.0,1.0,2.0],"TravelTime":[0.0,15.5,29.8],'
    '"StatisticalSpread":[1.0,1.1,1.2],"Observability":[0.9,0.8,0.7]}]}'
)


def test_travel_time_data_reads_json():
    data = TravelTimeData.from_json(DATA_JSON)
    assert data.phase == "Pg"
    assert data.travel_time == 22.456
    assert data.depth_derivative == 0.0
    assert data.location_use_flag is True
    assert data.association_weight_flag is False
    assert data.get_errors() == []


def test_travel_time_data_writes_json():
    assert TravelTimeData.from_json(DATA_JSON).to_json() == DATA_JSON


def test_travel_time_data_optional_fields_omitted():
    data = TravelTimeData(
        phase="S",
        travel_time=10.0,
        distance_derivative=1.0,
        depth_derivative=2.0,
        ray_derivative=3.0,
        statistical_spread=4.0,
        observability=5.0,
    )
    assert data.is_valid()
    assert set(data.to_json()) == {
        "Phase",
        "TravelTime",
        "DistanceDerivative",
        "DepthDerivative",
        "RayDerivative",
        "StatisticalSpread",
        "Observability",
    }


def test_travel_time_data_errors_in_declaration_order():
    data = TravelTimeData.from_json({"TravelTime": 2.0, "LocationUseFlag": "yes"})
    assert data.location_use_flag is None
    assert data.get_errors() == [
        "Empty Phase in TravelTimeData class.",
        "No DistanceDerivative in TravelTimeData class.",
        "No DepthDerivative in TravelTimeData class.",
        "No RayDerivative in TravelTimeData class.",
        "No StatisticalSpread in TravelTimeData class.",
        "No Observability in TravelTimeData class.",
    ]


def test_plot_data_reads_and_writes_json():
    plot = TravelTimePlotData.from_json(PLOT_JSON)
    assert plot.distance == (0.0, 1.0, 2.0)
    assert plot.travel_time == (0.0, 15.5, 29.8)
    assert plot.get_errors() == []
    assert plot.to_json() == PLOT_JSON


def test_plot_data_accepts_lists_and_stores_tuples():
    plot = TravelTimePlotData(
        phase="P", distance=[1, 2], travel_time=[3.0, 4.0],
        statistical_spread=[0.1, 0.2], observability=[0.5, 0.6],
    )
    assert plot.distance == (1.0, 2.0)
    assert plot == TravelTimePlotData.from_json(plot.to_json())


def test_plot_data_rejects_mixed_arrays():
    plot = TravelTimePlotData.from_json(
        {"Phase": "P", "Distance": [1.0, "2"], "TravelTime": 3.0,
         "StatisticalSpread": [1.0], "Observability": [True]}
    )
    assert plot.distance == ()
    assert plot.travel_time == ()
    assert plot.observability == ()
    assert plot.get_errors() == [
        "Empty Distance in TravelTimePlotData class.",
        "Empty TravelTime in TravelTimePlotData class.",
        "Empty Observability in TravelTimePlotData class.",
    ]


def test_empty_plot_data_emits_required_keys():
    assert TravelTimePlotData().to_json() == {
        "Phase": "",
        "Distance": [],
        "TravelTime": [],
        "StatisticalSpread": [],
        "Observability": [],
    }


def test_request_defaults():
    request = TravelTimeRequest.from_json(deserialize('{"Distance":45.2,"Elevation":0.0}'))
    assert request.type == "Standard"
    assert request.distance == 45.2
    assert request.elevation == 0.0
    assert request.latitude is None
    assert request.data == ()
    assert request.plot_data == ()
    assert request.get_errors() == []


def test_request_omits_absent_optional_keys():
    request = TravelTimeRequest(distance=45.2, elevation=0.0)
    assert request.to_json_string() == '{"Type":"Standard","Distance":45.2,"Elevation":0.0}'


def test_request_reads_full_message():
    request = TravelTimeRequest.from_json_string(REQUEST_STRING)
    assert request.type == "Plot"
    assert request.latitude == 40.3344
    assert request.data == (TravelTimeData.from_json(DATA_JSON),)
    assert request.plot_data == (TravelTimePlotData.from_json(PLOT_JSON),)
    assert request.is_valid()


def test_request_writes_full_message():
    request = TravelTimeRequest(
        type="Plot",
        distance=45.2,
        elevation=0.5,
        latitude=40.3344,
        longitude=-121.44,
        data=[TravelTimeData.from_json(DATA_JSON)],
        plot_data=[TravelTimePlotData.from_json(PLOT_JSON)],
    )
    assert request.to_json_string() == REQUEST_STRING
    assert TravelTimeRequest.from_json_string(request.to_json_string()) == request


def test_request_preserves_data_order():
    phases = ["P", "Pg", "S", "Sg"]
    node = {
        "Distance": 1.0,
        "Elevation": 0.0,
        "Data": [dict(DATA_JSON, Phase=phase) for phase in phases],
    }
    request = TravelTimeRequest.from_json(node)
    assert [item.phase for item in request.data] == phases
    assert [item["Phase"] for item in request.to_json()["Data"]] == phases


def test_empty_sequences_are_not_emitted():
    request = TravelTimeRequest.from_json(
        {"Distance": 1.0, "Elevation": 0.0, "Data": [], "PlotData": []}
    )
    assert request == TravelTimeRequest.from_json({"Distance": 1.0, "Elevation": 0.0})
    assert "Data" not in request.to_json()
    assert "PlotData" not in request.to_json()


def test_non_array_sequences_are_ignored():
    request = TravelTimeRequest.from_json(
        {"Distance": 1.0, "Elevation": 0.0, "Data": {"Phase": "P"}, "PlotData": "P"}
    )
    assert request.data == ()
    assert request.plot_data == ()


@pytest.mark.parametrize("value", [None, "", 7])
def test_request_type_defaults_to_standard(value):
    request = TravelTimeRequest.from_json({"Type": value, "Distance": 1.0, "Elevation": 0.0})
    assert request.type == "Standard"
    assert request.get_errors() == []


@pytest.mark.parametrize("value", ["Standard", "Plot", "PlotStatistics"])
def test_request_accepts_known_types(value):
    request = TravelTimeRequest.from_json({"Type": value, "Distance": 1.0, "Elevation": 0.0})
    assert request.type == value
    assert request.is_valid()


def test_request_rejects_unknown_type():
    request = TravelTimeRequest.from_json({"Type": "standard", "Distance": 1.0, "Elevation": 0.0})
    assert request.type == "standard"
    assert request.get_errors() == ["Invalid Type in TravelTimeRequest class."]
    assert request.to_json()["Type"] == "standard"


def test_request_missing_required_numbers():
    request = TravelTimeRequest.from_json({"Type": "Bogus", "Latitude": 10.0})
    assert request.get_errors() == [
        "No Distance in TravelTimeRequest class.",
        "No Elevation in TravelTimeRequest class.",
        "Invalid Type in TravelTimeRequest class.",
    ]
    assert request.to_json() == {
        "Type": "Bogus",
        "Distance": None,
        "Elevation": None,
        "Latitude": 10.0,
    }


def test_nested_errors_are_index_qualified():
    node = {
        "Distance": 1.0,
        "Elevation": 0.0,
        "Data": [DATA_JSON, {"Phase": "S", "TravelTime": 2.0, "DistanceDerivative": 1.0,
                             "DepthDerivative": 1.0, "RayDerivative": 1.0,
                             "StatisticalSpread": 1.0}],
        "PlotData": [PLOT_JSON, 5],
    }
    request = TravelTimeRequest.from_json(node)

    assert len(request.data) == 2
    assert len(request.plot_data) == 2
    assert request.get_errors() == [
        "Data[1]: No Observability in TravelTimeData class.",
        "PlotData[1]: Empty Phase in TravelTimePlotData class.",
        "PlotData[1]: Empty Distance in TravelTimePlotData class.",
        "PlotData[1]: Empty TravelTime in TravelTimePlotData class.",
        "PlotData[1]: Empty StatisticalSpread in TravelTimePlotData class.",
        "PlotData[1]: Empty Observability in TravelTimePlotData class.",
    ]

    findings = request.get_findings()
    assert findings[0].path == "Data[1]"
    assert findings[0].field == "Observability"
    assert findings[0].entity == "TravelTimeData"
    assert findings[1].kind == "empty"


def test_request_requires_object():
    with pytest.raises(EntityTypeError):
        TravelTimeRequest.from_json("45.2")


def test_nested_elements_require_object():
    with pytest.raises(EntityTypeError):
        TravelTimeData.from_json(None)
    with pytest.raises(EntityTypeError):
        TravelTimePlotData.from_json([1.0])


def test_copy_is_deep_value_duplicate():
    request = TravelTimeRequest.from_json_string(REQUEST_STRING)
    duplicate = request.copy()
    assert duplicate == request
    assert duplicate is not request
    assert isinstance(duplicate.data, tuple)


def test_request_rejects_raw_objects_as_data():
    with pytest.raises(EntityTypeError):
        TravelTimeRequest(distance=1.0, elevation=0.0, data=[{"Phase": "P"}])


def test_request_rejects_wrong_entity_as_plot_data():
    with pytest.raises(EntityTypeError):
        TravelTimeRequest(distance=1.0, elevation=0.0, plot_data=[TravelTimeData()])


def test_request_stores_entity_lists_as_tuples():
    data = [TravelTimeData.from_json(DATA_JSON)]
    request = TravelTimeRequest(distance=1.0, elevation=0.0, data=data)
    assert request.data == (data[0],)
    assert request.get_errors() == []
