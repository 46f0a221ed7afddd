"""
Test suite containing functional unit tests for the curve parameters and
for the lifecycle of the process-wide default parameters in the
:obj:`bngroups.parameters` module.
"""
# pylint: disable=missing-function-docstring
from unittest import TestCase
import threading
from bn254.curve import r as bn254_r

from bngroups.fields import fp2
from bngroups.groups import point, point2
from bngroups.parameters import (
    parameters, init_public_parameters, public_parameters,
    reset_public_parameters, UninitializedParameters,
    ParametersAlreadyInitialized
)

class Test_parameters(TestCase):
    """
    Tests of the curve presets and of parameter validation.
    """
    def test_presets(self):
        for curve in ('bn254', 'alt_bn128'):
            params = parameters.from_curve(curve)
            self.assertEqual(params.name, curve)
            self.assertTrue(parameters.from_curve(curve) is params)
            self.assertEqual(params.p % 4, 3)
            self.assertEqual(params.p % 6, 1)
            self.assertEqual(pow(2, params.r - 1, params.r), 1)

    def test_bn254(self):
        params = parameters.from_curve('bn254')
        self.assertEqual(params.r, bn254_r)
        self.assertEqual(
            params.p,
            0x2523648240000001ba344d80000000086121000000000013a700000000000013
        )
        self.assertEqual(int(params.b), 2)

    def test_alt_bn128(self):
        params = parameters.from_curve('alt_bn128')
        self.assertEqual([int(c) for c in params.g1], [1, 2])
        self.assertEqual(params.b2 * fp2(9, 1, params.p), fp2(3, 0, params.p))
        self.assertEqual(
            params.frobenius_x,
            fp2(9, 1, params.p) ** ((params.p - 1) // 3)
        )

    def test_unknown_curve(self):
        self.assertRaises(ValueError, parameters.from_curve, 'secp256k1')

    def test_validation(self):
        alt = parameters.from_curve('alt_bn128')
        (p, r) = (alt.p, alt.r)
        b2 = (alt.b2.c0, alt.b2.c1)
        g2 = ((alt.g2[0].c0, alt.g2[0].c1), (alt.g2[1].c0, alt.g2[1].c1))

        custom = parameters('custom', p, r, 3, b2, (1, 2), g2)
        self.assertEqual(custom, alt)
        self.assertEqual(hash(custom), hash(alt))

        self.assertRaises(ValueError, parameters, 'bad', p + 2, r, 3, b2, (1, 2), g2)
        self.assertRaises(ValueError, parameters, 'bad', 11, r, 3, b2, (1, 2), g2)
        self.assertRaises(ValueError, parameters, 'bad', p, 1, 3, b2, (1, 2), g2)
        self.assertRaises(ValueError, parameters, 'bad', p, 1000003, 3, b2, (1, 2), g2)
        self.assertRaises(ValueError, parameters, 'bad', p, r + 1, 3, b2, (1, 2), g2)
        self.assertRaises(ValueError, parameters, 'bad', p, r, 3, (0, 0), (1, 2), g2)
        self.assertRaises(ValueError, parameters, 'bad', p, r, 3, b2, (1, 3), g2)
        self.assertRaises(ValueError, parameters, 'bad', p, r, 3, b2, (1, 2), (g2[1], g2[0]))

    def test_immutable(self):
        params = parameters.from_curve('alt_bn128')
        with self.assertRaises(AttributeError):
            params.r = 2
        with self.assertRaises(AttributeError):
            del params.p

class Test_public_parameters(TestCase):
    """
    Tests of the installation of the process-wide default parameters.
    """
    def setUp(self):
        reset_public_parameters()

    def tearDown(self):
        reset_public_parameters()

    def test_uninitialized(self):
        self.assertRaises(UninitializedParameters, public_parameters)
        self.assertRaises(UninitializedParameters, point.zero)
        self.assertRaises(UninitializedParameters, point2.one)
        self.assertRaises(UninitializedParameters, point.random)
        self.assertRaises(UninitializedParameters, point.from_str, '1 0 0')

    def test_init(self):
        params = init_public_parameters()
        self.assertEqual(params.name, 'bn254')
        self.assertTrue(public_parameters() is params)
        self.assertTrue(point.one().params is params)

    def test_init_idempotent(self):
        params = init_public_parameters('alt_bn128')
        self.assertTrue(init_public_parameters('alt_bn128') is params)
        self.assertTrue(init_public_parameters(parameters.from_curve('alt_bn128')) is params)

    def test_init_conflict(self):
        init_public_parameters('alt_bn128')
        self.assertRaises(ParametersAlreadyInitialized, init_public_parameters, 'bn254')
        self.assertEqual(public_parameters().name, 'alt_bn128')

    def test_init_concurrent(self):
        results = []
        threads = [
            threading.Thread(target=lambda: results.append(init_public_parameters('bn254')))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 8)
        self.assertTrue(all(params is results[0] for params in results))
