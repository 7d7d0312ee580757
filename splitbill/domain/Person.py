"""Person domain entity: someone taking part in the bill."""
from uuid import uuid4


class Person:
    def __init__(self, id: str = "", name: str = ""):
        self.id = id or uuid4().hex
        self.name = name

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        return isinstance(other, Person) and (self.id, self.name) == (other.id, other.name)

    def __hash__(self) -> int:
        return hash((self.id, self.name))

    @staticmethod
    def from_dict(data):
        '''Creates a Person from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Person(id=str(d.get("id") or ""), name=str(d.get("name") or ""))

    def to_dict(self):
        return {"id": self.id, "name": self.name}
