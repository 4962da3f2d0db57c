"""Placeholder interchange documents (glTF and IFC).

Both formats carry valid framing only. The glTF document holds one dummy
scene/node/mesh and the IFC document holds project boilerplate without
building elements.
"""

import json
from datetime import datetime

from .native import APPLICATION

GLTF_VERSION = "2.0"
TRIANGLES = 4  # glTF primitive mode


def gltf_document() -> dict:
    """Minimal glTF 2.0 document with a single dummy mesh."""
    return {
        "asset": {
            "version": GLTF_VERSION,
            "generator": APPLICATION,
        },
        "scene": 0,
        "scenes": [{"nodes": [0]}],
        "nodes": [{"mesh": 0}],
        "meshes": [
            {
                "primitives": [
                    {
                        "attributes": {"POSITION": 0},
                        "indices": 1,
                        "mode": TRIANGLES,
                    }
                ]
            }
        ],
    }


def gltf_text() -> str:
    return json.dumps(gltf_document(), indent=2)


def ifc_text(created: datetime) -> str:
    """ISO-10303-21 (IFC4) file with header and project/unit boilerplate."""
    stamp = created.isoformat()
    return f"""ISO-10303-21;
HEADER;
FILE_DESCRIPTION(('{APPLICATION} Export'),'2;1');
FILE_NAME('massing_export.ifc','{stamp}',(''),(''),'{APPLICATION}','','');
FILE_SCHEMA(('IFC4'));
ENDSEC;

DATA;
#1=IFCPROJECT('0w8$qLr6z44PARMpzvT0zx',#2,'Massing Project','Description',$,$,$,(#8),#7);
#2=IFCOWNERHISTORY(#3,#6,$,.NOCHANGE.,$,$,$,0);
#3=IFCPERSONANDORGANIZATION(#4,#5,$);
#4=IFCPERSON($,'Architect','User',$,$,$,$,$);
#5=IFCORGANIZATION($,'{APPLICATION}',$,$,$);
#6=IFCAPPLICATION(#5,'1.0','{APPLICATION}','MassingStudio');
#7=IFCUNITASSIGNMENT((#9,#10));
#8=IFCGEOMETRICREPRESENTATIONCONTEXT($,'Model',3,1.0E-5,#11,$);
#9=IFCSIUNIT(*,.LENGTHUNIT.,.MILLI.,.METRE.);
#10=IFCSIUNIT(*,.AREAUNIT.,$,.SQUARE_METRE.);
#11=IFCAXIS2PLACEMENT3D(#12,#13,#14);
#12=IFCCARTESIANPOINT((0.,0.,0.));
#13=IFCDIRECTION((0.,0.,1.));
#14=IFCDIRECTION((1.,0.,0.));
ENDSEC;
END-ISO-10303-21;
"""
