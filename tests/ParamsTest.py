#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests of the default parameter manager.
"""

from context import *
from CorrGen.Generator import CorrelationGenerator


def test_defaults():
    print("Testing the initial defaults...")
    params = DefaultParameters()
    generator = params.get_defaults('correlation_generator')
    assert generator['min'] == 0.0 and generator['max'] == 1.0
    assert generator['jitter'] is False
    assert generator['linear_system']['method'] == 'gauss_jordan'
    assert generator['output'] == {'digits': 4, 'banner_width': 56}
    assert params.get_defaults('batch_generation')['backend'] == 'loky'
    assert params.get_defaults('unknown') == {}


def test_update_and_reset():
    print("Testing deep update and reset...")
    params = DefaultParameters()
    params.update_defaults('correlation_generator', {'jitter': True, 'linear_system': {'cross_check': True}})
    generator = params.get_defaults('correlation_generator')
    assert generator['jitter'] is True
    assert generator['linear_system']['cross_check'] is True
    # untouched nested keys survive
    assert generator['linear_system']['method'] == 'gauss_jordan'

    params.reset_defaults('correlation_generator')
    assert params.get_defaults('correlation_generator')['jitter'] is False
    assert params.get_defaults('correlation_generator')['linear_system']['cross_check'] is False

    params.update_defaults('custom', {'a': 1})
    assert params.get_defaults('custom') == {'a': 1}
    params.reset_defaults('custom')
    assert params.get_defaults('custom') == {}


def test_instances_are_independent():
    print("Testing that parameter sets are not shared...")
    first = DefaultParameters()
    first.update_defaults('linear_system', {'epsilon': 1e-6})
    assert DefaultParameters().get_defaults('linear_system')['epsilon'] == 1e-12
    # nested defaults are copies
    assert first.get_defaults('correlation_generator')['linear_system']['epsilon'] == 1e-12

    param = {'linear_system': {'cross_check': True}}
    generator = CorrelationGenerator(param)
    generator.param['linear_system']['method'] = 'total_pivot'
    assert param == {'linear_system': {'cross_check': True}}
    assert CorrelationGenerator().param['linear_system']['method'] == 'gauss_jordan'


if __name__ == "__main__":
    test_defaults()
    test_update_and_reset()
    test_instances_are_independent()
    print("All parameter tests passed.")
