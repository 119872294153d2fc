import unittest

from ..common.errors import SolMissingStructError
from ..common.solana_block import (
    SolTxInfo, SolTxBodyInfo, SolTxMetaInfo, SolCompiledIxInfo, SolInnerIxInfo, SolInnerIxListInfo
)
from ..common.solana_ix_shape import SolIxShape
from ..common.solana_ix_walker import SolIxWalker, SolIxPosition

from .block_fixtures import make_tx, failed_meta, full_tx, full_tx_view_list, view_to_dict, expected_view


class TestSolIxWalker(unittest.TestCase):
    def test_empty_tx(self):
        tx = make_tx(acct_key_list=('00', '01', '02'), meta=failed_meta)
        self.assertEqual([], list(tx.iter_ix()))
        self.assertEqual([], list(tx.iter_compiled_ix()))

    def test_single_top_level_ix(self):
        tx = make_tx(
            acct_key_list=('a0', 'a1', 'a2'),
            ix_list=(SolCompiledIxInfo(program_id_idx=1, acct_idx_list=(0, 1), data=bytes([1, 2, 3])),)
        )
        self.assertEqual(
            [expected_view('a1', ['a0', 'a1'], '010203', 0, 1, 1)],
            [view_to_dict(view) for view in tx.iter_ix()]
        )

    def test_multiple_top_level_ix(self):
        tx = make_tx(
            acct_key_list=('a0', 'a1', 'a2'),
            ix_list=(
                SolCompiledIxInfo(program_id_idx=1, acct_idx_list=(0, 1), data=bytes([1, 2, 3])),
                SolCompiledIxInfo(program_id_idx=2, acct_idx_list=(1, 2), data=bytes([6, 7, 8])),
            )
        )
        self.assertEqual(
            [
                expected_view('a1', ['a0', 'a1'], '010203', 0, 1, 1),
                expected_view('a2', ['a1', 'a2'], '060708', 0, 2, 2),
            ],
            [view_to_dict(view) for view in tx.iter_ix()]
        )

    def test_full_deep_nested_ix(self):
        self.assertEqual(full_tx_view_list, [view_to_dict(view) for view in full_tx.iter_ix()])

    def test_full_compiled_ix(self):
        self.assertEqual(
            [full_tx_view_list[0], full_tx_view_list[2], full_tx_view_list[3]],
            [view_to_dict(view) for view in full_tx.iter_compiled_ix()]
        )

    def test_walk_positions(self):
        walker = SolIxWalker(full_tx)
        self.assertEqual(
            [
                SolIxPosition(0), SolIxPosition(0, 0),
                SolIxPosition(1),
                SolIxPosition(2), SolIxPosition(2, 0), SolIxPosition(2, 1),
            ],
            [position for _, position in walker.iter_ix()]
        )
        self.assertEqual(
            [True, False, True, True, False, False],
            [shape.is_compiled for shape, _ in walker.iter_ix()]
        )
        self.assertEqual('2:1', str(SolIxPosition(2, 1)))
        self.assertEqual('1', str(SolIxPosition(1)))

    def test_walk_len(self):
        walker = SolIxWalker(full_tx)
        self.assertEqual(3, walker.ix_cnt)
        self.assertEqual(6, walker.ix_tree_len())
        self.assertEqual(6, len(list(walker.iter_ix())))

    def test_stack_height_does_not_reorder(self):
        tx = make_tx(
            acct_key_list=('a0', 'a1', 'a2'),
            ix_list=(
                SolCompiledIxInfo(program_id_idx=0),
                SolCompiledIxInfo(program_id_idx=1),
            ),
            meta=SolTxMetaInfo(
                inner_ix_list=(
                    SolInnerIxListInfo(idx=1, ix_list=(SolInnerIxInfo(program_id_idx=2, stack_height=2),)),
                    SolInnerIxListInfo(idx=0, ix_list=(
                        SolInnerIxInfo(program_id_idx=2, stack_height=3),
                        SolInnerIxInfo(program_id_idx=1, stack_height=2),
                    )),
                )
            )
        )
        self.assertEqual(
            [(0, 0), (2, 3), (1, 2), (1, 0), (2, 2)],
            [(view.shape.program_id_idx, view.stack_height) for view in tx.iter_ix()]
        )

    def test_iterator_is_single_pass(self):
        walker = SolIxWalker(full_tx)
        ix_iter = walker.iter_ix()
        self.assertEqual(4, len([next(ix_iter) for _ in range(4)]))
        self.assertEqual(2, len(list(ix_iter)))
        self.assertEqual([], list(ix_iter))

        self.assertEqual(6, len(list(walker.iter_ix())))

    def test_inner_ix_list(self):
        walker = SolIxWalker(full_tx)
        self.assertEqual((), walker.inner_ix_list(1))
        self.assertEqual((), walker.inner_ix_list(10))
        self.assertEqual([5, 6], [shape.program_id_idx for shape in walker.inner_ix_list(2)])
        self.assertTrue(all(shape.kind == SolIxShape.Kind.Inner for shape in walker.inner_ix_list(2)))

    def test_orphan_inner_ix_group(self):
        tx = make_tx(
            acct_key_list=('a0', 'a1'),
            ix_list=(SolCompiledIxInfo(program_id_idx=0),),
            meta=SolTxMetaInfo(
                inner_ix_list=(SolInnerIxListInfo(idx=3, ix_list=(SolInnerIxInfo(program_id_idx=1),)),)
            )
        )
        with self.assertLogs('solana_block_view.common.solana_ix_walker', level='WARNING'):
            walker = SolIxWalker(tx)

        self.assertEqual([SolIxPosition(0)], [position for _, position in walker.iter_ix()])

    def test_duplicate_inner_ix_group(self):
        tx = make_tx(
            acct_key_list=('a0', 'a1', 'a2'),
            ix_list=(SolCompiledIxInfo(program_id_idx=0),),
            meta=SolTxMetaInfo(
                inner_ix_list=(
                    SolInnerIxListInfo(idx=0, ix_list=(SolInnerIxInfo(program_id_idx=1),)),
                    SolInnerIxListInfo(idx=0, ix_list=(SolInnerIxInfo(program_id_idx=2),)),
                )
            )
        )
        with self.assertLogs('solana_block_view.common.solana_ix_walker', level='WARNING'):
            walker = SolIxWalker(tx)

        self.assertEqual([0, 2], [shape.program_id_idx for shape, _ in walker.iter_ix()])

    def test_no_meta(self):
        tx = make_tx(
            acct_key_list=('a0', 'a1'),
            ix_list=(SolCompiledIxInfo(program_id_idx=1, acct_idx_list=(0,)),),
            meta=None
        )
        self.assertEqual([[b'\xa0']], [[acct.raw for acct in view.acct_list] for view in tx.iter_ix()])

    def test_missing_message(self):
        tx = SolTxInfo(tx=SolTxBodyInfo(sig_list=(b'\x01',)), meta=SolTxMetaInfo())
        with self.assertRaises(SolMissingStructError):
            tx.iter_ix()
        with self.assertRaises(SolMissingStructError):
            tx.iter_compiled_ix()

    def test_missing_transaction(self):
        tx = SolTxInfo(meta=SolTxMetaInfo())
        with self.assertRaises(SolMissingStructError) as ctx:
            SolIxWalker(tx)
        self.assertEqual('transaction', ctx.exception.struct_name)


if __name__ == '__main__':
    unittest.main()
