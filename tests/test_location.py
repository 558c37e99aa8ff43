"""Unit tests for the location scorer."""

from bandmatch.models import Location
from bandmatch.scoring.location import calculate, haversine_distance

NYC = Location(latitude=40.7128, longitude=-74.006)
NYC_DUPLICATE = Location(latitude=40.7128, longitude=-74.006)
LA = Location(latitude=34.0522, longitude=-118.2437)
CHICAGO = Location(latitude=41.8781, longitude=-87.6298)
BROOKLYN = Location(latitude=40.6782, longitude=-73.9442)
LONDON = Location(latitude=51.5074, longitude=-0.1278)
MID_DISTANCE = Location(latitude=40.5128, longitude=-73.8026)  # ~28km from NYC
FAR_DISTANCE = Location(latitude=40.2128, longitude=-73.8026)  # ~58km from NYC


class TestDistance:
    def test_identical_coordinates(self):
        result = calculate(NYC, NYC_DUPLICATE)
        assert result.score == 100
        assert result.distance == 0

    def test_nyc_to_la(self):
        result = calculate(NYC, LA)
        assert 3900 < result.distance < 4000
        assert result.score == 0

    def test_nyc_to_chicago(self):
        assert abs(haversine_distance(NYC, CHICAGO) - 1145) < 100

    def test_symmetric(self):
        for a, b in [(NYC, LA), (NYC, LONDON), (BROOKLYN, MID_DISTANCE)]:
            assert calculate(a, b).distance == calculate(b, a).distance

    def test_poles(self):
        north = Location(latitude=90, longitude=0)
        south = Location(latitude=-90, longitude=0)
        result = calculate(north, south)
        assert result.distance > 19000
        assert result.score == 0

    def test_antimeridian_takes_short_way(self):
        east = Location(latitude=0, longitude=179)
        west = Location(latitude=0, longitude=-179)
        result = calculate(east, west)
        assert result.distance < 1000
        assert result.score == 0


class TestScoreCurve:
    def test_within_optimal_distance(self):
        result = calculate(NYC, BROOKLYN)
        assert 0 < result.distance < 25
        assert result.score == 100

    def test_decay_between_optimal_and_max(self):
        result = calculate(NYC, MID_DISTANCE)
        assert 25 < result.distance < 100
        assert 0 < result.score < 100

    def test_farther_scores_lower(self):
        mid = calculate(NYC, MID_DISTANCE)
        far = calculate(NYC, FAR_DISTANCE)
        assert far.distance > mid.distance
        assert far.score < mid.score

    def test_monotonic_non_increasing(self):
        scores = []
        for step in range(0, 12):
            point = Location(latitude=40.7128 + step * 0.1, longitude=-74.006)
            scores.append(calculate(NYC, point).score)
        assert scores[0] == 100
        assert all(b <= a for a, b in zip(scores, scores[1:]))

    def test_decay_tail_is_low_but_positive(self):
        # ~89km north of NYC
        result = calculate(NYC, Location(latitude=41.5128, longitude=-74.006))
        assert 0 < result.score < 20

    def test_exactly_max_distance_is_cut_off(self):
        result = calculate(NYC, Location(latitude=41.6128, longitude=-74.006))
        assert abs(result.distance - 100) < 1
        assert result.score == 0

    def test_equidistant_points_score_equally(self):
        north = calculate(NYC, Location(latitude=40.8128, longitude=-74.006))
        south = calculate(NYC, Location(latitude=40.6128, longitude=-74.006))
        assert abs(north.distance - south.distance) < 1
        assert north.score == south.score

    def test_scores_are_ints(self):
        assert isinstance(calculate(NYC, MID_DISTANCE).score, int)


class TestCustomDistances:
    def test_custom_max_distance(self):
        result = calculate(NYC, CHICAGO, max_distance=50)
        assert result.score == 0

    def test_custom_optimal_distance(self):
        result = calculate(NYC, MID_DISTANCE, max_distance=200, optimal_distance=50)
        assert result.score == 100

    def test_optimal_equals_max(self):
        assert calculate(NYC, CHICAGO, 50, 50).score == 0
        assert calculate(NYC, MID_DISTANCE, 30, 30).score == 100
        assert calculate(NYC, FAR_DISTANCE, 30, 30).score == 0

    def test_optimal_beyond_max(self):
        # Nothing past max_distance scores, whatever the plateau says.
        assert calculate(NYC, FAR_DISTANCE, 40, 80).score == 0
        assert calculate(NYC, MID_DISTANCE, 40, 80).score == 100

    def test_plateau_for_any_distance_within_optimal(self):
        for step in range(1, 10):
            point = Location(latitude=40.7128 + step * 0.05, longitude=-74.006)
            result = calculate(NYC, point, max_distance=500, optimal_distance=60)
            assert result.distance <= 60
            assert result.score == 100
