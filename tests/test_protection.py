from kernelpurge.protection import ProtectedVersionSet, find_newest_image
from kernelpurge.versions import KernelVersion


def test_newest_image_ignores_unsigned_and_meta_packages():
    packages = [
        'linux-image-5.15.0-10-generic',
        'linux-image-6.1.0-18-generic',
        'linux-image-6.2.0-1-generic-unsigned',
        'linux-image-unsigned-6.3.0-1-generic',
        'linux-image-generic',
        'linux-headers-7.0.0-1-generic',
    ]
    assert find_newest_image(packages) == 'linux-image-6.1.0-18-generic'


def test_newest_image_is_numeric_not_lexical():
    packages = ['linux-image-6.10.0-1-generic', 'linux-image-6.9.0-5-generic']
    assert find_newest_image(packages) == 'linux-image-6.10.0-1-generic'


def test_newest_image_tie_keeps_last_enumerated():
    packages = ['linux-image-6.1.0-18-amd64', 'linux-image-6.1.0-18-cloud-amd64']
    assert find_newest_image(packages) == 'linux-image-6.1.0-18-cloud-amd64'


def test_newest_image_none_when_no_candidates():
    assert find_newest_image([]) is None
    assert find_newest_image(['linux-headers-6.1.0-18-generic', 'linux-image-amd64']) is None


def test_build_with_distinct_versions():
    protection = ProtectedVersionSet.build('5.15.0-10-generic', 'linux-image-6.1.0-18-generic')
    assert len(protection) == 2
    assert KernelVersion('5.15.0-10') in protection
    assert KernelVersion('6.1.0-18') in protection


def test_build_collapses_same_version():
    protection = ProtectedVersionSet.build('6.1.0-18-generic', 'linux-image-6.1.0-18-generic')
    assert protection.versions == frozenset({KernelVersion('6.1.0-18')})


def test_build_tolerates_missing_inputs():
    assert len(ProtectedVersionSet.build('6.1.0-18-generic', None)) == 1
    assert len(ProtectedVersionSet.build('weird-release', None)) == 0
    assert len(ProtectedVersionSet.build('', 'linux-image-generic')) == 0


def test_is_protected_extracts_from_raw_names():
    protection = ProtectedVersionSet.build('6.1.0-18-generic', 'linux-image-6.1.0-18-generic')
    assert protection.is_protected('linux-headers-6.1.0-18')
    assert protection.is_protected('linux-headers-6.1.0-18-generic')
    assert not protection.is_protected('linux-headers-6.1.0-1')
    assert not protection.is_protected('linux-headers-16.1.0-18')
    assert not protection.is_protected('linux-firmware')


def test_unsigned_variant_of_protected_version_is_itself_protected():
    protection = ProtectedVersionSet.build('6.1.0-18-generic', None)
    assert protection.is_protected('linux-image-unsigned-6.1.0-18-generic')
