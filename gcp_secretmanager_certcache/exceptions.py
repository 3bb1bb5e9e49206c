# -*- coding: utf-8 -*-

class SecretCacheError(Exception):
    """Base Error class."""


class CacheMiss(SecretCacheError):
    CUSTOM_ERROR_MESSAGE = "No cached data for key {} at {}"

    def __init__(self, key, name):
        super(CacheMiss, self).__init__(self.CUSTOM_ERROR_MESSAGE.format(key, name))
        self._key = key
        self._name = name

    @property
    def key(self):
        return self._key

    @property
    def name(self):
        return self._name


class ClientSetupError(SecretCacheError):
    CUSTOM_ERROR_MESSAGE = "failed to setup client: {}"

    def __init__(self, error):
        super(ClientSetupError, self).__init__(self.CUSTOM_ERROR_MESSAGE.format(str(error)))
        self._error = error

    @property
    def stage(self):
        return "setup"

    @property
    def error(self):
        return self._error


class SecretOperationError(SecretCacheError):
    CUSTOM_ERROR_MESSAGE = "Secret manager {} failed for {} error {}"

    def __init__(self, stage, resource, error):
        super(SecretOperationError, self).__init__(self.CUSTOM_ERROR_MESSAGE.format(stage,
                                                                                    resource,
                                                                                    str(error)))
        self._stage = stage
        self._resource = resource
        self._error = error

    @property
    def stage(self):
        return self._stage

    @property
    def resource(self):
        return self._resource

    @property
    def error(self):
        return self._error
