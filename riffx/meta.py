"""
Plumbing of the declarative layer.

The fields declared as class attributes of a Chunk act as templates: the
metaclass records their order and puts a descriptor in their place, the
descriptor gives to each chunk its own copy of the template on first access.
"""
import copy
import logging


logger = logging.getLogger(__name__)


class FieldBase(object):
    '''What a field must provide in order to be declared into a Chunk'''

    def contribute_to_chunk(self, cls, name):
        if name in cls._meta.fields:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        self.name = name
        cls._meta.fields.append(name)
        setattr(cls, name, FieldDescriptor(self))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father

        return instance


class FieldDescriptor(object):

    def __init__(self, template: FieldBase):
        self.template = template

    def __get__(self, chunk, owner=None):
        if chunk is None:
            return self

        name = self.template.name
        # the copy lands into the instance dictionary that from now on
        # takes precedence over this descriptor
        if name not in chunk.__dict__:
            logger.debug('creating field \'%s\' for %s' % (name, chunk.__class__.__name__))
            chunk.__dict__[name] = self.template.create(father=chunk)

        return chunk.__dict__[name]


class Layout(object):
    '''Names of the fields of a Chunk class in order of unpacking'''

    def __init__(self, fields=None):
        self.fields = list(fields or [])


class MetaChunk(type):

    def __new__(mcs, name, bases, attrs):
        '''The fields of the parents come first, then the ones declared here.'''
        declared = [(_, attrs.pop(_)) for _, value in list(attrs.items()) if isinstance(value, FieldBase)]

        cls = super().__new__(mcs, name, bases, attrs)

        inherited = [_ for base in bases if isinstance(base, MetaChunk) for _ in base._meta.fields]
        cls._meta = Layout(inherited)

        for field_name, field in declared:
            field.contribute_to_chunk(cls, field_name)

        return cls
