# ----------------------
# file   : tests/fake_motor.py
# function: mongomock 컬렉션을 motor 처럼 await 할 수 있게 감싼 테스트용 DB
# ----------------------


class FakeCursor:
    def __init__(self, documents):
        self.documents = list(documents)

    def sort(self, key, direction=1):
        self.documents.sort(key=lambda document: document[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        if length is None:
            return list(self.documents)
        return self.documents[:length]


class FakeCollection:
    def __init__(self, collection):
        self.collection = collection

    def find(self, *args, **kwargs):
        return FakeCursor(self.collection.find(*args, **kwargs))

    def aggregate(self, pipeline, **kwargs):
        return FakeCursor(self.collection.aggregate(pipeline, **kwargs))


class FakeMotorDatabase:
    def __init__(self, database):
        self.database = database

    def __getitem__(self, name):
        return FakeCollection(self.database[name])
