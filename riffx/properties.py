import logging


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class CueChunk(Chunk):
            count  = fields.StructField('I')
            points = fields.ArrayField(CuePoint, n=Dependency('.count'))

    and have the number of elements of the field named 'points' strictly
    connected to the value of the field named 'count'.

    The expression is resolved like module names: a leading '.' indicates
    we refer to a field at the same level, i.e. a field of the father; each
    further component descends into sub-chunks.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path = self.expression.split('.')
        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']

        if fields_path[0] == '':  # relative dependency
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = instance
            while field.father is not None:
                field = field.father

        for component_name in fields_path:
            field = getattr(field, component_name)

        self.logger.debug(' resolved \'%s\' as field %s' % (self.expression, field.__class__.__name__))

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        return self.resolve_field(instance).value
