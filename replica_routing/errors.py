# Copyright 2014 MongoDB, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Exceptions raised by the replica_routing package."""


class RoutingError(Exception):
    """Base class for all replica_routing exceptions."""


class ConfigurationError(RoutingError):
    """Raised when something is incorrectly configured."""


class InvalidArgument(ConfigurationError, ValueError):
    """Raised when a read preference is requested by an unknown name.

    Subclasses :exc:`ValueError` so callers validating user input can catch
    either.
    """


class InvalidOperation(RoutingError):
    """Raised when a client attempts to perform an invalid operation.

    E.g., setting a field on a builder that has already been built.
    """
