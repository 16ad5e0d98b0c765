import io

import pytest
from pytest import approx

from geoson.collections import Feature, FeatureCollection
from geoson.coordinates import Datum, Heading
from geoson.crs import CRS
from geoson.errors import UnknownCRSError
from geoson.structures import Line, Path, Point, Polygon
from tests.functions import assert_points_equal, make_document, make_feature


def _collection():
    return FeatureCollection(
        [
            Feature(Point(1., 2., 3.), {'name': 'point'}, id='"a"'),
            Feature(Line(Point(0., 0.), Point(1., 1.))),
            Feature(Path([Point(0., 0.), Point(1., 1.), Point(2., 0.)]), {'a': '1', 'b': '2'}),
            Feature(Polygon([Point(0., 0.), Point(1., 0.), Point(1., 1.), Point(0., 0.)])),
        ],
        crs=CRS.WGS,
        datum=Datum(52., 5., 0.),
        heading=Heading(2.),
    )


def test_feature_init():
    feature = Feature(Point(1., 2.))
    assert feature.properties == {}
    assert feature.id is None


def test_feature_eq():
    assert Feature(Point(1., 2.), {'a': 'b'}, id='1') == Feature(Point(1., 2.), {'a': 'b'}, id='1')
    assert Feature(Point(1., 2.), {'a': 'b'}, id='1') != Feature(Point(1., 2.), {'a': 'b'}, id='2')
    assert Feature(Point(1., 2.), {'a': 'b'}) != Feature(Point(1., 2.), {'a': 'c'})
    assert Feature(Point(1., 2.)) != Feature(Point(1., 3.))
    assert Feature(Point(1., 2.)) != Point(1., 2.)


def test_feature_repr():
    assert repr(Feature(Point(1., 2.), {'a': 'b'})) == '<Feature Point with 1 properties>'


def test_feature_copy():
    feature = Feature(Point(1., 2.), {'a': 'b'}, id='1')
    new = feature.copy()
    assert new == feature

    new.properties['a'] = 'c'
    new.geometry.x = 5.
    assert feature.properties['a'] == 'b'
    assert feature.geometry.x == 1.


def test_feature_set_property():
    feature = Feature(Point(1., 2.))
    feature.set_property('name', 'point')
    assert feature.properties == {'name': 'point'}

    feature.set_property('n', 3)
    feature.set_property('flags', [True, None])
    assert feature.properties == {'name': 'point', 'n': '3', 'flags': '[true,null]'}

    new = feature.set_property('name', 'other', inplace=False)
    assert new.properties['name'] == 'other'
    assert feature.properties['name'] == 'point'


def test_feature_to_geojson():
    feature = Feature(Point(1., 2., 3.), {'name': 'point'}, id='"a"')
    assert feature.to_geojson(Datum()) == {
        'type': 'Feature',
        'geometry': {'type': 'Point', 'coordinates': [1., 2., 3.]},
        'properties': {'name': 'point'},
        'id': 'a',
    }

    gjson = feature.to_geojson(Datum(), 'WGS')
    assert gjson['geometry']['coordinates'][0] == approx(1. / 111_319.49, abs=1e-6)


def test_collection_init():
    fc = FeatureCollection([])
    assert fc.crs is CRS.WGS
    assert fc.datum == Datum(0., 0., 0.)
    assert fc.heading == Heading(0.)

    fc = FeatureCollection([], crs='ENU')
    assert fc.crs is CRS.ENU

    with pytest.raises(ValueError):
        FeatureCollection([Point(1., 2.)])

    with pytest.raises(ValueError):
        FeatureCollection([], crs='EPSG:3857')


def test_collection_bool():
    assert _collection()
    assert not FeatureCollection([])


def test_collection_eq():
    assert _collection() == _collection()

    other = _collection()
    other.heading = Heading(3.)
    assert _collection() != other

    other = _collection()
    other.features.pop()
    assert _collection() != other

    assert _collection() != _collection().features


def test_collection_getitem():
    fc = _collection()
    assert fc[0].geometry == Point(1., 2., 3.)
    assert len(fc[1:3]) == 2


def test_collection_iter():
    assert [type(x.geometry) for x in _collection()] == [Point, Line, Path, Polygon]


def test_collection_len():
    fc = _collection()
    assert len(fc) == 4
    fc.features.pop(0)
    assert len(fc) == 3


def test_collection_repr():
    assert repr(_collection()) == '<FeatureCollection of 4 features (WGS)>'
    assert repr(FeatureCollection([Feature(Point(0., 0.))], crs=CRS.ENU)) == \
        '<FeatureCollection of 1 feature (ENU)>'


def test_collection_copy():
    fc = _collection()
    new = fc.copy()
    assert new == fc

    new.datum.lat = 0.
    new.features[0].properties['name'] = 'changed'
    assert fc.datum.lat == 52.
    assert fc[0].properties['name'] == 'point'


def test_collection_add():
    fc1 = FeatureCollection([Feature(Point(1., 2.))], datum=Datum(52., 5., 0.))
    fc2 = FeatureCollection([Feature(Point(3., 4.))], datum=Datum(52., 5., 0.))
    combined = fc1 + fc2
    assert [x.geometry for x in combined] == [Point(1., 2.), Point(3., 4.)]
    assert combined.datum == Datum(52., 5., 0.)

    # Other collection is reprojected into this collection's frame
    fc3 = FeatureCollection([Feature(Point(0., 0.))], datum=Datum(52.1, 5.1, 0.))
    combined = fc1 + fc3
    assert combined.datum == Datum(52., 5., 0.)
    assert 6800. < combined[1].geometry.x < 6950.
    assert fc3[0].geometry == Point(0., 0.)

    with pytest.raises(ValueError):
        _ = fc1 + [Feature(Point(0., 0.))]


def test_collection_describe():
    stream = io.StringIO()
    _collection().describe(stream)
    assert stream.getvalue() == (
        'CRS: WGS\n'
        'DATUM: 52, 5, 0\n'
        'HEADING: 2\n'
        'FEATURES: 4\n'
        '  POINT POINTS:1 PROPS:1\n'
        '  LINE POINTS:2 PROPS:0\n'
        '  PATH POINTS:3 PROPS:2\n'
        '  POLYGON POINTS:4 PROPS:0\n'
    )


def test_collection_from_geojson():
    doc = make_document(
        [make_feature({'type': 'MultiPoint', 'coordinates': [[1., 2.], [3., 4.]]}, {'n': 3})],
        crs='ENU'
    )
    fc = FeatureCollection.from_geojson(doc)
    assert len(fc) == 2
    assert fc[1] == Feature(Point(3., 4.), {'n': '3'})

    fc = FeatureCollection.from_geojson(doc, crs='WGS')
    assert fc.crs is CRS.WGS
    assert abs(fc[0].geometry.x) > 1000.


def test_collection_reanchor():
    old = Datum(52., 5., 0.)
    new = Datum(52.1, 5.1, 0.)
    point = Point.from_wgs(5.1, 52.1, 0., old)
    fc = FeatureCollection([Feature(point)], datum=old)

    moved = fc.reanchor(new, inplace=False)
    assert moved.datum == new
    assert fc.datum == old
    assert fc[0].geometry == point
    assert_points_equal(moved[0].geometry, Point(0., 0., 0.), 1e-6)

    fc.reanchor(new)
    assert fc.datum == new
    assert_points_equal(fc[0].geometry, Point(0., 0., 0.), 1e-6)

    # The collection does not share the caller's datum
    new.lat = 0.
    assert fc.datum.lat == 52.1


def test_collection_datum_assignment_does_not_move_geometry():
    fc = FeatureCollection([Feature(Point(1., 2., 3.))], crs=CRS.ENU, datum=Datum(52., 5., 0.))
    fc.datum = Datum(10., 10., 0.)
    assert fc[0].geometry == Point(1., 2., 3.)
    assert fc.to_geojson()['properties']['datum'] == [10., 10., 0.]


def test_collection_to_geojson():
    gjson = _collection().to_geojson(crs=CRS.ENU)
    assert gjson['type'] == 'FeatureCollection'
    assert gjson['properties'] == {'crs': 'ENU', 'datum': [52., 5., 0.], 'heading': 2.}
    assert [x['geometry']['type'] for x in gjson['features']] == [
        'Point', 'LineString', 'LineString', 'Polygon'
    ]

    # Defaults to the declared crs
    assert _collection().to_geojson()['properties']['crs'] == 'EPSG:4326'


def test_feature_properties_coerced():
    feature = Feature(Point(1., 2.), {'n': 3, 'b': False, 'a': [1, 2], 'z': None, 's': 'x'})
    assert feature.properties == {'n': '3', 'b': 'false', 'a': '[1,2]', 'z': 'null', 's': 'x'}

    # The caller's dict is not shared
    props = {'s': 'x'}
    feature = Feature(Point(1., 2.), props)
    feature.set_property('t', 'y')
    assert props == {'s': 'x'}


def test_feature_id_must_be_json_text():
    assert Feature(Point(1., 2.), id='"abc"').id == '"abc"'
    assert Feature(Point(1., 2.), id='7').id == '7'

    with pytest.raises(ValueError, match='JSON text'):
        Feature(Point(1., 2.), id='abc')

    with pytest.raises(ValueError):
        Feature(Point(1., 2.), id='{"k":')

    with pytest.raises(ValueError):
        Feature(Point(1., 2.), id=7)


@pytest.mark.parametrize(
    'label, expected',
    [
        ('EPSG:4326', CRS.WGS),
        ('WGS84', CRS.WGS),
        ('WGS', CRS.WGS),
        ('ENU', CRS.ENU),
        ('ECEF', CRS.ENU),
        (CRS.ENU, CRS.ENU),
    ]
)
def test_collection_init_crs_labels(label, expected):
    assert FeatureCollection([], crs=label).crs is expected


def test_collection_init_unknown_crs():
    with pytest.raises(UnknownCRSError, match='EPSG:3857'):
        FeatureCollection([], crs='EPSG:3857')
