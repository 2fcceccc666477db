"""
# hdf5tree: HDF5 images as plain values.

An HDF5 file is a hierarchy of groups containing datasets, each one an array
of elements whose binary layout is described by a datatype stored in the file
itself. This package converts an image into a tree of generic values that a
tabular pipeline can consume without knowing anything about the format.

Three operations are defined

 1. decode(): given a slice of native bytes and a type descriptor, build the
    corresponding value, recursively for compound and array types.

 2. build_dataset(): a dataset becomes the list of its decoded elements.

 3. build_group(): a group becomes a record with a field for each dataset
    followed by a field for each sub-group.

The container itself is parsed by an engine (h5py by default) that provides
the datatypes and the native bytes of the datasets.

The output is made of

 - int, float, bool for the scalar types (enums decode as their value)
 - str for the strings
 - list for the datasets and the arrays
 - dict for the compound types and the groups
"""
from .builder import TreeBuilder, decode_container, from_hdf5_bytes
from .decoder import ValueDecoder, decode
from .options import DecodeOptions
