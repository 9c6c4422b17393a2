from src.utils.csv_insights import analyze_csv_data


def test_empty_rows_return_empty_insight():
    assert analyze_csv_data([]) == {"totalRows": 0, "columns": [], "sampleData": [], "insights": []}


def test_numeric_column_reports_average_and_range():
    rows = [
        {"region": "north", "revenue": "100"},
        {"region": "south", "revenue": "250.5"},
        {"region": "north", "revenue": ""},
        {"region": "east", "revenue": "n/a"},
    ]
    insight = analyze_csv_data(rows)
    assert insight["totalRows"] == 4
    assert insight["columns"] == ["region", "revenue"]
    assert "revenue: Average 175.25 (Range: 100-250.5)" in insight["insights"]
    assert not any(line.startswith("region: Average") for line in insight["insights"])


def test_categorical_column_reports_first_three_categories():
    rows = [{"plan": p} for p in ["basic", "pro", "basic", "team", "enterprise", "pro"]]
    insight = analyze_csv_data(rows)
    assert "plan: 4 unique categories - Top: basic, pro, team" in insight["insights"]


def test_categorical_skips_all_unique_and_single_value_columns():
    rows = [
        {"id": "a1", "country": "ES"},
        {"id": "a2", "country": "ES"},
        {"id": "a3", "country": "ES"},
    ]
    insight = analyze_csv_data(rows)
    assert not any(line.startswith("id:") for line in insight["insights"])
    assert not any(line.startswith("country:") for line in insight["insights"])


def test_sample_and_dataset_size_insight():
    rows = [{"n": str(i), "tier": "a" if i % 2 else "b"} for i in range(12)]
    insight = analyze_csv_data(rows)
    assert len(insight["sampleData"]) == 5
    assert insight["sampleData"][0] == {"n": "0", "tier": "b"}
    assert "Dataset size: 12 records - suitable for segmentation analysis" in insight["insights"]


def test_small_dataset_has_no_segmentation_hint():
    rows = [{"n": "1"}, {"n": "2"}]
    insight = analyze_csv_data(rows)
    assert not any("Dataset size" in line for line in insight["insights"])
